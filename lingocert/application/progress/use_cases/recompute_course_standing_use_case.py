"""Use case for recomputing a learner's standing on a course."""

import structlog

from lingocert.application.assessment.protocols import (
    AttemptRepositoryProtocol,
    QuizCatalogProtocol,
)
from lingocert.application.common.unit_of_work import UnitOfWork
from lingocert.application.progress.protocols import CourseStandingRepositoryProtocol
from lingocert.domain.common.value_objects import CourseId, LearnerId
from lingocert.domain.progress.entities import CourseStanding
from lingocert.domain.progress.services import ProgressAggregator
from lingocert.exceptions import CourseNotFoundError

logger = structlog.get_logger(__name__)


class RecomputeCourseStandingUseCase:
    """Rebuilds a CourseStanding from the full set of scored attempts."""

    def __init__(
        self,
        standing_repository: CourseStandingRepositoryProtocol,
        attempt_repository: AttemptRepositoryProtocol,
        quiz_catalog: QuizCatalogProtocol,
        aggregator: ProgressAggregator,
        uow: UnitOfWork,
    ) -> None:
        self.standing_repository = standing_repository
        self.attempt_repository = attempt_repository
        self.quiz_catalog = quiz_catalog
        self.aggregator = aggregator
        self.uow = uow

    def recompute(self, learner_id: int, course_id: int) -> CourseStanding:
        """
        Recompute and store the standing. Unchanged results are not rewritten.

        Raises:
            CourseNotFoundError: If the course does not exist
            ConcurrentConflictError: If a concurrent recompute created the row first
        """
        learner_id_vo = LearnerId(learner_id)
        course_id_vo = CourseId(course_id)

        course = self.quiz_catalog.get_course(course_id_vo)
        if course is None:
            raise CourseNotFoundError(course_id)
        if not course.required_quizzes:
            logger.warning("course_has_no_required_quizzes", course_id=course_id)

        with self.uow:
            quiz_ids = [quiz.id for lesson in course.lessons for quiz in lesson.quizzes]
            summaries = self.attempt_repository.scored_summaries(learner_id_vo, quiz_ids)
            recomputed = self.aggregator.recompute(learner_id_vo, course, summaries)

            existing = self.standing_repository.find(learner_id_vo, course_id_vo)
            if existing is None:
                target = recomputed
            elif existing.replace_with(recomputed):
                target = existing
            else:
                logger.debug(
                    "course_standing_unchanged", learner_id=learner_id, course_id=course_id
                )
                return existing

            saved = self.standing_repository.save(target)
            self.uow.track(target)
            self.uow.commit()

        logger.info(
            "course_standing_recomputed",
            learner_id=learner_id,
            course_id=course_id,
            completion_percent=saved.completion_percent,
            overall_score=saved.overall_score,
            proficiency_level=saved.proficiency_level,
        )
        return saved

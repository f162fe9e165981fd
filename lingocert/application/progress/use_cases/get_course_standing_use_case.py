"""Use case for reading a learner's standing on a course."""

from lingocert.application.assessment.protocols import (
    AttemptRepositoryProtocol,
    QuizCatalogProtocol,
)
from lingocert.application.progress.protocols import CourseStandingRepositoryProtocol
from lingocert.domain.common.value_objects import CourseId, LearnerId
from lingocert.domain.progress.entities import CourseStanding
from lingocert.domain.progress.services import ProgressAggregator
from lingocert.exceptions import CourseNotFoundError


class GetCourseStandingUseCase:
    def __init__(
        self,
        standing_repository: CourseStandingRepositoryProtocol,
        attempt_repository: AttemptRepositoryProtocol,
        quiz_catalog: QuizCatalogProtocol,
        aggregator: ProgressAggregator,
    ) -> None:
        self.standing_repository = standing_repository
        self.attempt_repository = attempt_repository
        self.quiz_catalog = quiz_catalog
        self.aggregator = aggregator

    def get_standing(self, learner_id: int, course_id: int) -> CourseStanding:
        """
        Return the stored standing, or compute one without storing it.

        A learner who never scored an attempt gets a zero standing rather
        than an error.

        Raises:
            CourseNotFoundError: If the course does not exist
        """
        learner_id_vo = LearnerId(learner_id)
        course_id_vo = CourseId(course_id)

        course = self.quiz_catalog.get_course(course_id_vo)
        if course is None:
            raise CourseNotFoundError(course_id)

        stored = self.standing_repository.find(learner_id_vo, course_id_vo)
        if stored is not None:
            return stored

        quiz_ids = [quiz.id for lesson in course.lessons for quiz in lesson.quizzes]
        summaries = self.attempt_repository.scored_summaries(learner_id_vo, quiz_ids)
        return self.aggregator.recompute(learner_id_vo, course, summaries)

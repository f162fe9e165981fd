"""Use case for submitting a quiz attempt."""

import structlog

from lingocert.application.assessment.dtos import SubmissionOutcome
from lingocert.application.assessment.protocols import (
    AttemptRepositoryProtocol,
    QuizCatalogProtocol,
)
from lingocert.application.certification.use_cases.issue_certificate_use_case import (
    IssueCertificateUseCase,
)
from lingocert.application.common.unit_of_work import UnitOfWork
from lingocert.application.progress.use_cases.recompute_course_standing_use_case import (
    RecomputeCourseStandingUseCase,
)
from lingocert.domain.assessment.entities import AttemptState, QuizAttempt
from lingocert.domain.assessment.entities.attempt import ACTIVE_STATES
from lingocert.domain.assessment.exceptions import InvalidAttemptStateError
from lingocert.domain.assessment.services import QuizScorer
from lingocert.domain.certification.entities import Certificate
from lingocert.domain.common.exceptions import ConcurrentConflictError
from lingocert.domain.common.value_objects import AttemptId, CourseId, LearnerId
from lingocert.domain.progress.entities import CourseStanding
from lingocert.exceptions import AttemptNotFoundError, QuizNotFoundError

logger = structlog.get_logger(__name__)


class SubmitAttemptUseCase:
    """
    Use case for submitting an attempt.

    Scoring commits first. Recomputing the course standing and issuing a
    certificate each run in their own transaction afterwards, and both
    are idempotent, so a failed follow-up is repaired by the next submit.
    """

    def __init__(
        self,
        attempt_repository: AttemptRepositoryProtocol,
        quiz_catalog: QuizCatalogProtocol,
        scorer: QuizScorer,
        recompute_use_case: RecomputeCourseStandingUseCase,
        issue_certificate_use_case: IssueCertificateUseCase,
        uow: UnitOfWork,
    ) -> None:
        self.attempt_repository = attempt_repository
        self.quiz_catalog = quiz_catalog
        self.scorer = scorer
        self.recompute_use_case = recompute_use_case
        self.issue_certificate_use_case = issue_certificate_use_case
        self.uow = uow

    def submit(self, attempt_id: int) -> SubmissionOutcome:
        """
        Score an attempt and propagate the result to progress and certification.

        Submitting an already scored attempt returns the stored result
        without rescoring.

        Raises:
            AttemptNotFoundError: If the attempt does not exist
            InvalidAttemptStateError: If the attempt was abandoned
            IncompleteAttemptError: If a question has no answer
        """
        attempt_id_vo = AttemptId(attempt_id)
        newly_scored = False

        with self.uow:
            attempt = self.attempt_repository.find_by_id(attempt_id_vo, for_update=True)
            if attempt is None:
                raise AttemptNotFoundError(attempt_id)

            quiz = self.quiz_catalog.get_quiz(attempt.quiz_id)
            if quiz is None:
                raise QuizNotFoundError(attempt.quiz_id.value)

            if attempt.state is not AttemptState.SCORED:
                attempt.submit(quiz, self.scorer)
                if self.attempt_repository.mark_scored(attempt):
                    self.uow.track(attempt)
                    self.uow.commit()
                    newly_scored = True
                else:
                    self.uow.rollback()
                    attempt = self._reload_scored(attempt_id_vo)

        if newly_scored and attempt.result is not None:
            logger.info(
                "attempt_scored",
                attempt_id=attempt_id,
                learner_id=attempt.learner_id.value,
                quiz_id=attempt.quiz_id.value,
                percent_correct=attempt.result.percent_correct,
                passed=attempt.result.passed,
            )

        standing, certificate = self._propagate(attempt.learner_id, quiz.course_id)
        return SubmissionOutcome(
            attempt=attempt,
            standing=standing,
            certificate=certificate,
            newly_scored=newly_scored,
        )

    def _reload_scored(self, attempt_id: AttemptId) -> QuizAttempt:
        """Resolve a lost submit race to the winner's stored result."""
        current = self.attempt_repository.find_by_id(attempt_id)
        if current is None:
            raise AttemptNotFoundError(attempt_id.value)
        if current.state is not AttemptState.SCORED:
            raise InvalidAttemptStateError(
                attempt_id.value,
                current.state.value,
                (s.value for s in ACTIVE_STATES),
                "submit",
            )
        logger.info("attempt_submit_race_resolved", attempt_id=attempt_id.value)
        return current

    def _propagate(
        self, learner_id: LearnerId, course_id: CourseId
    ) -> tuple[CourseStanding, Certificate | None]:
        try:
            return self._recompute_and_issue(learner_id, course_id)
        except ConcurrentConflictError as e:
            logger.info(
                "submission_follow_up_retry",
                learner_id=learner_id.value,
                course_id=course_id.value,
                resource=e.resource,
            )
            return self._recompute_and_issue(learner_id, course_id)

    def _recompute_and_issue(
        self, learner_id: LearnerId, course_id: CourseId
    ) -> tuple[CourseStanding, Certificate | None]:
        standing = self.recompute_use_case.recompute(learner_id.value, course_id.value)
        certificate = self.issue_certificate_use_case.issue_if_eligible(
            learner_id.value, course_id.value
        )
        return standing, certificate

"""Use case for starting a quiz attempt."""

import structlog

from lingocert.application.assessment.protocols import (
    AttemptRepositoryProtocol,
    QuizCatalogProtocol,
)
from lingocert.application.common.protocols import LearnerDirectoryProtocol
from lingocert.application.common.unit_of_work import UnitOfWork
from lingocert.domain.assessment.entities import QuizAttempt
from lingocert.domain.assessment.exceptions import (
    AttemptAlreadyActiveError,
    InvalidQuizDefinitionError,
)
from lingocert.domain.common.exceptions import ConcurrentConflictError
from lingocert.domain.common.value_objects import LearnerId, QuizId
from lingocert.exceptions import LearnerNotFoundError, QuizNotFoundError

logger = structlog.get_logger(__name__)


class StartAttemptUseCase:
    """Use case for starting a quiz attempt."""

    def __init__(
        self,
        attempt_repository: AttemptRepositoryProtocol,
        quiz_catalog: QuizCatalogProtocol,
        learner_directory: LearnerDirectoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.attempt_repository = attempt_repository
        self.quiz_catalog = quiz_catalog
        self.learner_directory = learner_directory
        self.uow = uow

    def start_attempt(self, learner_id: int, quiz_id: int) -> QuizAttempt:
        """
        Start a new attempt for a learner on a quiz.

        The check for an active attempt is optimistic; the partial unique
        index on active attempts settles concurrent starts, and the loser
        is reported the same way as a sequential second start.

        Raises:
            QuizNotFoundError: If the quiz does not exist
            LearnerNotFoundError: If the learner does not exist
            InvalidQuizDefinitionError: If the quiz has no questions
            AttemptAlreadyActiveError: If an attempt is already in flight
        """
        learner_id_vo = LearnerId(learner_id)
        quiz_id_vo = QuizId(quiz_id)

        quiz = self.quiz_catalog.get_quiz(quiz_id_vo)
        if quiz is None:
            raise QuizNotFoundError(quiz_id)
        if not quiz.questions:
            raise InvalidQuizDefinitionError(quiz_id, "quiz has no questions")
        if self.learner_directory.find_profile(learner_id_vo) is None:
            raise LearnerNotFoundError(learner_id)

        with self.uow:
            active = self.attempt_repository.find_active(learner_id_vo, quiz_id_vo)
            if active is not None:
                raise AttemptAlreadyActiveError(learner_id, quiz_id, active.id.value)

            attempt = QuizAttempt.start(learner_id_vo, quiz_id_vo)
            try:
                saved = self.attempt_repository.add(attempt)
            except ConcurrentConflictError:
                self.uow.rollback()
                winner = self.attempt_repository.find_active(learner_id_vo, quiz_id_vo)
                logger.info(
                    "attempt_start_race_lost",
                    learner_id=learner_id,
                    quiz_id=quiz_id,
                    active_attempt_id=winner.id.value if winner else None,
                )
                raise AttemptAlreadyActiveError(
                    learner_id, quiz_id, winner.id.value if winner else None
                ) from None

            self.uow.track(attempt)
            self.uow.commit()

        logger.info(
            "attempt_started", attempt_id=saved.id.value, learner_id=learner_id, quiz_id=quiz_id
        )
        return saved

"""Use case for recording an answer within an attempt."""

from collections.abc import Iterable

import structlog

from lingocert.application.assessment.protocols import (
    AttemptRepositoryProtocol,
    QuizCatalogProtocol,
)
from lingocert.application.common.unit_of_work import UnitOfWork
from lingocert.domain.assessment.entities import QuizAttempt
from lingocert.domain.assessment.entities.attempt import ACTIVE_STATES
from lingocert.domain.assessment.exceptions import InvalidAttemptStateError
from lingocert.domain.assessment.services import AnswerEvaluator
from lingocert.domain.common.value_objects import AttemptId, OptionId, QuestionId
from lingocert.exceptions import AttemptNotFoundError, QuizNotFoundError

logger = structlog.get_logger(__name__)


class RecordAnswerUseCase:
    """Use case for recording (or replacing) the answer to one question."""

    def __init__(
        self,
        attempt_repository: AttemptRepositoryProtocol,
        quiz_catalog: QuizCatalogProtocol,
        evaluator: AnswerEvaluator,
        uow: UnitOfWork,
    ) -> None:
        self.attempt_repository = attempt_repository
        self.quiz_catalog = quiz_catalog
        self.evaluator = evaluator
        self.uow = uow

    def record_answer(
        self, attempt_id: int, question_id: int, selected_option_ids: Iterable[int]
    ) -> QuizAttempt:
        """
        Evaluate a selection and store it as the answer for a question.

        Retries of the same request are safe: the answer row for
        (attempt, question) is replaced, other questions are untouched.

        Raises:
            AttemptNotFoundError: If the attempt does not exist
            InvalidAttemptStateError: If the attempt is no longer active
            UnknownQuestionError: If the question is not part of the quiz
            UnknownOptionError: If an option does not belong to the question
        """
        attempt_id_vo = AttemptId(attempt_id)

        with self.uow:
            attempt = self.attempt_repository.find_by_id(attempt_id_vo)
            if attempt is None:
                raise AttemptNotFoundError(attempt_id)

            quiz = self.quiz_catalog.get_quiz(attempt.quiz_id)
            if quiz is None:
                raise QuizNotFoundError(attempt.quiz_id.value)

            answer = attempt.record_answer(
                quiz,
                QuestionId(question_id),
                [OptionId(option_id) for option_id in selected_option_ids],
                self.evaluator,
            )

            # Guards against a submit or abandon that committed after our read
            if not self.attempt_repository.mark_in_progress(attempt_id_vo):
                current = self.attempt_repository.find_by_id(attempt_id_vo)
                state = current.state.value if current else "missing"
                raise InvalidAttemptStateError(
                    attempt_id, state, (s.value for s in ACTIVE_STATES), "record an answer for"
                )

            saved = self.attempt_repository.save_answer(attempt_id_vo, answer)
            attempt.answers[saved.question_id] = saved
            self.uow.commit()

        logger.info(
            "answer_recorded",
            attempt_id=attempt_id,
            question_id=question_id,
            is_correct=saved.is_correct,
        )
        return attempt

"""Assessment module domain exceptions."""

from collections.abc import Iterable

from lingocert.domain.common.exceptions import DomainError, ValidationError


class InvalidAttemptStateError(DomainError):
    """Raised when an operation is not allowed in the attempt's current state."""

    def __init__(self, attempt_id: int, actual: str, expected: Iterable[str], action: str) -> None:
        expected_states = sorted(expected)
        super().__init__(
            f"Cannot {action} attempt {attempt_id} in state {actual}",
            {
                "attempt_id": attempt_id,
                "actual_state": actual,
                "expected_states": expected_states,
            },
        )
        self.attempt_id = attempt_id
        self.actual = actual
        self.expected = expected_states


class AttemptAlreadyActiveError(DomainError):
    """Raised when a learner starts a quiz that already has an attempt in flight."""

    def __init__(self, learner_id: int, quiz_id: int, attempt_id: int | None = None) -> None:
        details: dict[str, object] = {"learner_id": learner_id, "quiz_id": quiz_id}
        if attempt_id is not None:
            details["active_attempt_id"] = attempt_id
        super().__init__(
            f"Learner {learner_id} already has an active attempt on quiz {quiz_id}", details
        )
        self.learner_id = learner_id
        self.quiz_id = quiz_id
        self.attempt_id = attempt_id


class IncompleteAttemptError(DomainError):
    """Raised when submitting an attempt that leaves questions unanswered."""

    def __init__(self, attempt_id: int, missing_question_ids: Iterable[int]) -> None:
        missing = sorted(missing_question_ids)
        super().__init__(
            f"Attempt {attempt_id} has {len(missing)} unanswered question(s)",
            {"attempt_id": attempt_id, "missing_question_ids": missing},
        )
        self.attempt_id = attempt_id
        self.missing_question_ids = missing


class UnknownQuestionError(DomainError):
    """Raised when an answer references a question outside the attempt's quiz."""

    def __init__(self, question_id: int, quiz_id: int) -> None:
        super().__init__(
            f"Question {question_id} does not belong to quiz {quiz_id}",
            {"question_id": question_id, "quiz_id": quiz_id},
        )
        self.question_id = question_id
        self.quiz_id = quiz_id


class UnknownOptionError(ValidationError):
    """Raised when a selection references options the question does not offer."""

    def __init__(self, question_id: int, option_ids: Iterable[int]) -> None:
        unknown = sorted(option_ids)
        super().__init__(
            f"Option(s) {unknown} do not belong to question {question_id}",
            field="selected_option_ids",
            value=unknown,
        )
        self.details["question_id"] = question_id
        self.question_id = question_id
        self.option_ids = unknown


class InvalidQuizDefinitionError(DomainError):
    """Raised when quiz content is misconfigured (an authoring bug, never defaulted)."""

    def __init__(self, quiz_id: int, reason: str, question_id: int | None = None) -> None:
        details: dict[str, object] = {"quiz_id": quiz_id, "reason": reason}
        if question_id is not None:
            details["question_id"] = question_id
        super().__init__(f"Quiz {quiz_id} is misconfigured: {reason}", details)
        self.quiz_id = quiz_id
        self.reason = reason
        self.question_id = question_id

"""Use case for reading a single attempt."""

from lingocert.application.assessment.protocols import AttemptRepositoryProtocol
from lingocert.domain.assessment.entities import QuizAttempt
from lingocert.domain.common.value_objects import AttemptId
from lingocert.exceptions import AttemptNotFoundError


class GetAttemptUseCase:
    def __init__(self, attempt_repository: AttemptRepositoryProtocol) -> None:
        self.attempt_repository = attempt_repository

    def get_attempt(self, attempt_id: int) -> QuizAttempt:
        attempt = self.attempt_repository.find_by_id(AttemptId(attempt_id))
        if attempt is None:
            raise AttemptNotFoundError(attempt_id)
        return attempt

"""Use case for abandoning a quiz attempt."""

import structlog

from lingocert.application.assessment.protocols import AttemptRepositoryProtocol
from lingocert.application.common.unit_of_work import UnitOfWork
from lingocert.domain.assessment.entities import QuizAttempt
from lingocert.domain.common.value_objects import AttemptId
from lingocert.exceptions import AttemptNotFoundError

logger = structlog.get_logger(__name__)


class AbandonAttemptUseCase:
    def __init__(self, attempt_repository: AttemptRepositoryProtocol, uow: UnitOfWork) -> None:
        self.attempt_repository = attempt_repository
        self.uow = uow

    def abandon(self, attempt_id: int) -> QuizAttempt:
        """
        Abandon an attempt. Abandoning a scored or abandoned attempt is a no-op.

        Raises:
            AttemptNotFoundError: If the attempt does not exist
        """
        attempt_id_vo = AttemptId(attempt_id)

        with self.uow:
            attempt = self.attempt_repository.find_by_id(attempt_id_vo, for_update=True)
            if attempt is None:
                raise AttemptNotFoundError(attempt_id)

            if not attempt.abandon():
                logger.debug("attempt_already_finished", attempt_id=attempt_id)
                return attempt

            if not self.attempt_repository.mark_abandoned(attempt):
                # A concurrent submit or abandon finished it first
                self.uow.rollback()
                current = self.attempt_repository.find_by_id(attempt_id_vo)
                if current is None:
                    raise AttemptNotFoundError(attempt_id)
                return current

            self.uow.track(attempt)
            self.uow.commit()

        logger.info("attempt_abandoned", attempt_id=attempt_id)
        return attempt

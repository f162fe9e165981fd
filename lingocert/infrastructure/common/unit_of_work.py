"""SQLAlchemy implementation of the unit of work."""

from collections.abc import Callable, Iterable

from sqlalchemy.orm import Session

from lingocert.application.common.unit_of_work import UnitOfWork
from lingocert.domain.common import DomainEvent


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work bound to a request-scoped session."""

    def __init__(
        self,
        db: Session,
        event_handlers: Iterable[Callable[[DomainEvent], None]] = (),
    ) -> None:
        super().__init__()
        self.db = db
        for handler in event_handlers:
            self.register_event_handler(handler)

    def _commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

"""
Unit of Work interface.

Every state-changing use case runs inside one unit of work, so all of
its writes commit or roll back together.

Example:
    with self.uow:
        attempt = self.attempt_repository.find_by_id(attempt_id, for_update=True)
        attempt.submit(quiz, self.scorer)
        self.attempt_repository.mark_scored(attempt)
        self.uow.track(attempt)
        self.uow.commit()
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType
from typing import Self

from lingocert.domain.common import AggregateRoot, DomainEvent


class UnitOfWork(ABC):
    """
    Unit of Work interface (Port).

    The Unit of Work:
    - Manages database transactions
    - Rolls back when the block exits with an exception
    - Dispatches domain events of tracked aggregates after commit

    Infrastructure provides the SQLAlchemy implementation.
    """

    def __init__(self) -> None:
        self._tracked: list[AggregateRoot] = []  # type: ignore[type-arg]
        self._handlers: list[Callable[[DomainEvent], None]] = []

    @abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Discard all changes made within the unit of work."""
        raise NotImplementedError

    def commit(self) -> None:
        """Persist all changes, then dispatch events of tracked aggregates."""
        self._commit()
        events = self.collect_events()
        for event in events:
            for handler in self._handlers:
                handler(event)

    def track(self, aggregate: AggregateRoot) -> None:  # type: ignore[type-arg]
        """Register an aggregate whose events should be dispatched on commit."""
        if not any(tracked is aggregate for tracked in self._tracked):
            self._tracked.append(aggregate)

    def collect_events(self) -> list[DomainEvent]:
        """Collect and clear pending events from tracked aggregates."""
        events: list[DomainEvent] = []
        for aggregate in self._tracked:
            events.extend(aggregate.collect_events())
        self._tracked.clear()
        return events

    def register_event_handler(self, handler: Callable[[DomainEvent], None]) -> None:
        """Register a handler to be called for each domain event after commit."""
        self._handlers.append(handler)

    def __enter__(self) -> Self:
        """Enter the unit of work context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """
        Exit the unit of work context.

        If an exception occurred, rollback. Otherwise, do nothing
        (commit must be called explicitly).
        """
        if exc_type is not None:
            self._tracked.clear()
            self.rollback()

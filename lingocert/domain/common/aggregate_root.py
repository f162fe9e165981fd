"""
Base class for Aggregate Roots.

An aggregate root guards the invariants of a cluster of domain objects.
Attempts own their answers; certificates own their supersession link.

Example:
    @dataclass
    class QuizAttempt(AggregateRoot[AttemptId]):
        id: AttemptId
        state: AttemptState

        def abandon(self) -> None:
            self.state = AttemptState.ABANDONED
            self._record_event(AttemptAbandoned(self.id))
"""

from dataclasses import dataclass, field
from typing import Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType


@dataclass
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Base class for Aggregate Roots in the domain model.

    Events recorded while a use case mutates the aggregate are collected
    by the Unit of Work and dispatched once the transaction commits.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False, kw_only=True
    )

    def _record_event(self, event: DomainEvent) -> None:
        """Record a domain event to be dispatched after commit."""
        self._events.append(event)

    def collect_events(self) -> list[DomainEvent]:
        """Collect and clear all recorded domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def pending_events(self) -> list[DomainEvent]:
        """Return pending events without clearing them."""
        return self._events.copy()

"""Domain events raised by quiz attempts."""

from dataclasses import dataclass

from lingocert.domain.common.domain_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class AttemptStarted(DomainEvent):
    learner_id: int
    quiz_id: int


@dataclass(frozen=True, kw_only=True)
class AttemptScored(DomainEvent):
    attempt_id: int
    learner_id: int
    quiz_id: int
    percent_correct: int
    passed: bool


@dataclass(frozen=True, kw_only=True)
class AttemptAbandoned(DomainEvent):
    attempt_id: int
    learner_id: int
    quiz_id: int

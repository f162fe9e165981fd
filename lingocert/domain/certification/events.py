"""Domain events raised by certificates."""

from dataclasses import dataclass

from lingocert.domain.common.domain_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class CertificateIssued(DomainEvent):
    certificate_id: str
    learner_id: int
    course_id: int
    proficiency_level: str
    final_score: int
    supersedes: str | None = None


@dataclass(frozen=True, kw_only=True)
class CertificateSuperseded(DomainEvent):
    certificate_id: str
    superseded_by: str

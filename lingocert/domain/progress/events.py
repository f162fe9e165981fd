"""Domain events raised by course standings."""

from dataclasses import dataclass

from lingocert.domain.common.domain_event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class CourseCompleted(DomainEvent):
    learner_id: int
    course_id: int
    overall_score: int
    proficiency_level: str

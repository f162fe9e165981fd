"""Protocol for CourseStanding persistence."""

from typing import Protocol

from lingocert.domain.common.value_objects import CourseId, LearnerId
from lingocert.domain.progress.entities import CourseStanding


class CourseStandingRepositoryProtocol(Protocol):
    def find(self, learner_id: LearnerId, course_id: CourseId) -> CourseStanding | None:
        """Find the stored standing of a learner on a course."""
        ...

    def save(self, standing: CourseStanding) -> CourseStanding:
        """
        Insert or update a standing (one row per learner and course).

        Raises:
            ConcurrentConflictError: If a concurrent recompute inserted the row first
        """
        ...

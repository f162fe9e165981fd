"""Protocol for learner profile lookups."""

from typing import Protocol

from lingocert.domain.certification.entities import LearnerSnapshot
from lingocert.domain.common.value_objects import LearnerId


class LearnerDirectoryProtocol(Protocol):
    def find_profile(self, learner_id: LearnerId) -> LearnerSnapshot | None:
        """Current display name and email of a learner, or None if unknown."""
        ...

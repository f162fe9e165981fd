"""Domain service deciding whether a standing earns a (new) certificate."""

from dataclasses import dataclass
from enum import StrEnum

from lingocert.domain.certification.entities import Certificate
from lingocert.domain.progress.entities import CourseStanding
from lingocert.domain.progress.value_objects import ProficiencyScale


class IssuanceAction(StrEnum):
    NONE = "none"
    KEEP = "keep"
    ISSUE = "issue"
    SUPERSEDE = "supersede"


@dataclass(frozen=True)
class IssuanceDecision:
    action: IssuanceAction
    reason: str


class IssuancePolicy:
    """Certificates follow the course standing.

    - Not completed: nothing to issue (an existing certificate is kept)
    - Completed, no current certificate: issue
    - Completed, level ranks above the current certificate's: supersede
    - Otherwise: keep the current certificate
    """

    def __init__(self, scale: ProficiencyScale) -> None:
        self.scale = scale

    def decide(self, standing: CourseStanding, current: Certificate | None) -> IssuanceDecision:
        if not standing.completed:
            if current is not None:
                return IssuanceDecision(IssuanceAction.KEEP, "course no longer complete")
            return IssuanceDecision(IssuanceAction.NONE, "course not completed")
        if current is None:
            return IssuanceDecision(IssuanceAction.ISSUE, "first completion")
        if self.scale.is_higher(standing.proficiency_level, than=current.proficiency_level):
            return IssuanceDecision(
                IssuanceAction.SUPERSEDE,
                f"level raised from {current.proficiency_level} to {standing.proficiency_level}",
            )
        return IssuanceDecision(IssuanceAction.KEEP, "level unchanged")

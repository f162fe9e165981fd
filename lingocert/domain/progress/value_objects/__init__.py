from .proficiency_scale import ProficiencyScale
from .scored_attempt import ScoredAttemptSummary

__all__ = ["ProficiencyScale", "ScoredAttemptSummary"]

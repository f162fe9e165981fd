from dataclasses import dataclass
from datetime import datetime

from lingocert.domain.common.value_object import ValueObject
from lingocert.domain.common.value_objects import AttemptId, QuizId


@dataclass(frozen=True)
class ScoredAttemptSummary(ValueObject):
    """The slice of a scored attempt that progress aggregation needs."""

    attempt_id: AttemptId
    quiz_id: QuizId
    percent_correct: int
    passed: bool
    scored_at: datetime

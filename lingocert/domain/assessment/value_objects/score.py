"""Evaluation and scoring results."""

from dataclasses import dataclass

from lingocert.domain.common.value_object import ValueObject
from lingocert.domain.common.value_objects import OptionId


@dataclass(frozen=True)
class Correctness(ValueObject):
    """
    Verdict for one answered question.

    ``correct_option_ids`` is the snapshot of the options flagged correct
    when the answer was evaluated, kept so later content edits cannot
    change how a historical answer reads.
    """

    is_correct: bool
    correct_option_ids: frozenset[OptionId]


@dataclass(frozen=True)
class ScoreResult(ValueObject):
    """Outcome of scoring one attempt."""

    correct_count: int
    total_questions: int
    percent_correct: int
    min_passing_score: int
    passed: bool

"""Value objects of the assessment context."""

from .quiz_definition import (
    CourseDefinition,
    LessonDefinition,
    OptionSnapshot,
    QuestionSnapshot,
    QuizDefinition,
    SelectionMode,
)
from .score import Correctness, ScoreResult

__all__ = [
    "Correctness",
    "CourseDefinition",
    "LessonDefinition",
    "OptionSnapshot",
    "QuestionSnapshot",
    "QuizDefinition",
    "ScoreResult",
    "SelectionMode",
]

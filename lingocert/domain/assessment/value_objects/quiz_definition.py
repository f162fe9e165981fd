"""
Materialized, read-only snapshots of course content.

Courses, lessons, quizzes, questions and options are authored elsewhere.
The assessment engine receives them as an immutable graph resolved once
per operation, so no lazy loading happens while rules are evaluated.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from lingocert.domain.common.value_object import ValueObject
from lingocert.domain.common.value_objects import (
    CourseId,
    LessonId,
    OptionId,
    QuestionId,
    QuizId,
)


class SelectionMode(StrEnum):
    """How many options a learner may pick for a question."""

    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class OptionSnapshot(ValueObject):
    """An answer option with its correctness flag at load time."""

    id: OptionId
    text: str
    is_correct: bool
    media_url: str | None = None


@dataclass(frozen=True)
class QuestionSnapshot(ValueObject):
    """A question and its ordered options."""

    id: QuestionId
    prompt: str
    options: tuple[OptionSnapshot, ...]
    selection_mode: SelectionMode = SelectionMode.SINGLE
    points: int = 1
    media_url: str | None = None

    @property
    def option_ids(self) -> frozenset[OptionId]:
        return frozenset(option.id for option in self.options)

    @property
    def correct_option_ids(self) -> frozenset[OptionId]:
        return frozenset(option.id for option in self.options if option.is_correct)


@dataclass(frozen=True)
class QuizDefinition(ValueObject):
    """
    A quiz with its ordered questions.

    Attributes:
        min_passing_score: Percentage (0-100) an attempt needs to pass
        course_id: Course the quiz's lesson belongs to
    """

    id: QuizId
    title: str
    lesson_id: LessonId
    course_id: CourseId
    min_passing_score: int
    questions: tuple[QuestionSnapshot, ...] = field(default_factory=tuple)

    @property
    def question_ids(self) -> tuple[QuestionId, ...]:
        return tuple(question.id for question in self.questions)

    @property
    def weight(self) -> int:
        """Weight of this quiz in course-level averages (sum of question points)."""
        return sum(question.points for question in self.questions)

    def find_question(self, question_id: QuestionId) -> QuestionSnapshot | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


@dataclass(frozen=True)
class LessonDefinition(ValueObject):
    """A lesson of a course and the quizzes it holds."""

    id: LessonId
    title: str
    order_index: int
    is_required: bool
    quizzes: tuple[QuizDefinition, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CourseDefinition(ValueObject):
    """A course, its language and its lessons in order."""

    id: CourseId
    title: str
    language_name: str
    lessons: tuple[LessonDefinition, ...] = field(default_factory=tuple)

    @property
    def required_quizzes(self) -> tuple[QuizDefinition, ...]:
        """Quizzes of required lessons; these gate course completion."""
        return tuple(
            quiz
            for lesson in sorted(self.lessons, key=lambda lesson: lesson.order_index)
            if lesson.is_required
            for quiz in lesson.quizzes
        )

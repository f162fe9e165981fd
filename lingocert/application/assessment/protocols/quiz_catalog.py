"""Protocol for reading course content snapshots."""

from typing import Protocol

from lingocert.domain.assessment.value_objects import CourseDefinition, QuizDefinition
from lingocert.domain.common.value_objects import CourseId, QuizId


class QuizCatalogProtocol(Protocol):
    """Read-only access to materialized quiz and course definitions."""

    def get_quiz(self, quiz_id: QuizId) -> QuizDefinition | None:
        """
        Load a quiz with all of its questions and options.

        Returns:
            Frozen QuizDefinition, or None if the quiz does not exist
        """
        ...

    def get_course(self, course_id: CourseId) -> CourseDefinition | None:
        """
        Load a course with its lessons, quizzes, questions and options.

        Returns:
            Frozen CourseDefinition, or None if the course does not exist
        """
        ...

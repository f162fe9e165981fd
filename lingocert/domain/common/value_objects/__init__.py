"""Common value objects shared across all domain modules."""

from .ids import (
    AnswerId,
    AttemptId,
    CertificateRecordId,
    CourseId,
    CourseStandingId,
    LearnerId,
    LessonId,
    OptionId,
    QuestionId,
    QuizId,
)

__all__ = [
    "AnswerId",
    "AttemptId",
    "CertificateRecordId",
    "CourseId",
    "CourseStandingId",
    "LearnerId",
    "LessonId",
    "OptionId",
    "QuestionId",
    "QuizId",
]

"""Progress API schemas."""

from .course_standing_schemas import (
    CourseStandingResponse,
    CourseStandingSchema,
    QuizStandingSchema,
    to_course_standing_schema,
)

__all__ = [
    "CourseStandingResponse",
    "CourseStandingSchema",
    "QuizStandingSchema",
    "to_course_standing_schema",
]

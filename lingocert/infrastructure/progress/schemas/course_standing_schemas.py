"""Pydantic schemas for course standing responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from lingocert.domain.progress.entities import CourseStanding


class QuizStandingSchema(BaseModel):
    """Standing on one required quiz."""

    quiz_id: int
    best_score: int = Field(..., ge=0, le=100, description="Best passing score, 0 if none")
    latest_score: int | None = Field(None, description="Score of the latest scored attempt")
    passed: bool
    attempt_count: int
    weight: int = Field(..., description="Weight of the quiz in the overall score")


class CourseStandingSchema(BaseModel):
    """Aggregate progress of a learner on a course."""

    learner_id: int
    course_id: int
    completion_percent: int = Field(..., ge=0, le=100)
    overall_score: int = Field(..., ge=0, le=100)
    proficiency_level: str
    completed: bool
    computed_at: datetime
    quizzes: list[QuizStandingSchema]


class CourseStandingResponse(BaseModel):
    standing: CourseStandingSchema


def to_course_standing_schema(standing: CourseStanding) -> CourseStandingSchema:
    return CourseStandingSchema(
        learner_id=standing.learner_id.value,
        course_id=standing.course_id.value,
        completion_percent=standing.completion_percent,
        overall_score=standing.overall_score,
        proficiency_level=standing.proficiency_level,
        completed=standing.completed,
        computed_at=standing.computed_at,
        quizzes=[
            QuizStandingSchema(
                quiz_id=quiz.quiz_id.value,
                best_score=quiz.best_score,
                latest_score=quiz.latest_score,
                passed=quiz.passed,
                attempt_count=quiz.attempt_count,
                weight=quiz.weight,
            )
            for quiz in standing.quiz_standings
        ],
    )

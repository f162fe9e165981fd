"""Pydantic schemas for attempt API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from lingocert.domain.assessment.entities import AttemptState, QuizAttempt, RecordedAnswer
from lingocert.infrastructure.certification.schemas import CertificateSummary
from lingocert.infrastructure.progress.schemas import CourseStandingSchema


class StartAttemptRequest(BaseModel):
    learner_id: int = Field(..., ge=1, description="Learner taking the quiz")
    quiz_id: int = Field(..., ge=1, description="Quiz to attempt")


class RecordAnswerRequest(BaseModel):
    question_id: int = Field(..., ge=1)
    selected_option_ids: list[int] = Field(
        ..., description="Selected options; an empty list records an incorrect answer"
    )


class AttemptAnswerSchema(BaseModel):
    """
    A recorded answer.

    Verdicts are frozen when the answer is recorded but only revealed
    once the attempt is scored.
    """

    question_id: int
    selected_option_ids: list[int]
    answered_at: datetime
    is_correct: bool | None = None
    correct_option_ids: list[int] | None = None


class ScoreResultSchema(BaseModel):
    correct_count: int
    total_questions: int
    percent_correct: int = Field(..., ge=0, le=100)
    min_passing_score: int
    passed: bool


class AttemptSchema(BaseModel):
    """Schema for attempt responses."""

    id: int
    learner_id: int
    quiz_id: int
    state: AttemptState
    started_at: datetime
    submitted_at: datetime | None = None
    scored_at: datetime | None = None
    abandoned_at: datetime | None = None
    answers: list[AttemptAnswerSchema]
    result: ScoreResultSchema | None = None


class AttemptResponse(BaseModel):
    success: bool = Field(..., description="Whether the operation was successful")
    message: str = Field(..., description="Response message")
    attempt: AttemptSchema


class SubmitAttemptResponse(AttemptResponse):
    course_standing: CourseStandingSchema | None = Field(
        None, description="Course standing after the attempt was scored"
    )
    certificate: CertificateSummary | None = Field(
        None, description="Current certificate for the course, if any"
    )


class AttemptStatisticsSchema(BaseModel):
    total_attempts: int = Field(..., description="Attempts in any state, abandoned included")
    scored_attempts: int
    passed_attempts: int
    failed_attempts: int
    average_score: float
    pass_rate: float = Field(..., description="Percentage of scored attempts that passed")
    quizzes_attempted: int
    quizzes_passed: int


def _answer_schema(answer: RecordedAnswer, reveal: bool) -> AttemptAnswerSchema:
    return AttemptAnswerSchema(
        question_id=answer.question_id.value,
        selected_option_ids=sorted(o.value for o in answer.selected_option_ids),
        answered_at=answer.answered_at,
        is_correct=answer.is_correct if reveal else None,
        correct_option_ids=(
            sorted(o.value for o in answer.correctness.correct_option_ids) if reveal else None
        ),
    )


def to_attempt_schema(attempt: QuizAttempt) -> AttemptSchema:
    reveal = attempt.state is AttemptState.SCORED
    result = attempt.result
    return AttemptSchema(
        id=attempt.id.value,
        learner_id=attempt.learner_id.value,
        quiz_id=attempt.quiz_id.value,
        state=attempt.state,
        started_at=attempt.started_at,
        submitted_at=attempt.submitted_at,
        scored_at=attempt.scored_at,
        abandoned_at=attempt.abandoned_at,
        answers=[_answer_schema(answer, reveal) for answer in attempt.ordered_answers],
        result=(
            ScoreResultSchema(
                correct_count=result.correct_count,
                total_questions=result.total_questions,
                percent_correct=result.percent_correct,
                min_passing_score=result.min_passing_score,
                passed=result.passed,
            )
            if result
            else None
        ),
    )

"""Assessment API schemas."""

from .attempt_schemas import (
    AttemptAnswerSchema,
    AttemptResponse,
    AttemptSchema,
    AttemptStatisticsSchema,
    RecordAnswerRequest,
    ScoreResultSchema,
    StartAttemptRequest,
    SubmitAttemptResponse,
    to_attempt_schema,
)

__all__ = [
    "AttemptAnswerSchema",
    "AttemptResponse",
    "AttemptSchema",
    "AttemptStatisticsSchema",
    "RecordAnswerRequest",
    "ScoreResultSchema",
    "StartAttemptRequest",
    "SubmitAttemptResponse",
    "to_attempt_schema",
]

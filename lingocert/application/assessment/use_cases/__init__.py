from .abandon_attempt_use_case import AbandonAttemptUseCase
from .attempt_history_use_case import AttemptHistoryUseCase
from .get_attempt_use_case import GetAttemptUseCase
from .record_answer_use_case import RecordAnswerUseCase
from .start_attempt_use_case import StartAttemptUseCase
from .submit_attempt_use_case import SubmitAttemptUseCase

__all__ = [
    "AbandonAttemptUseCase",
    "AttemptHistoryUseCase",
    "GetAttemptUseCase",
    "RecordAnswerUseCase",
    "StartAttemptUseCase",
    "SubmitAttemptUseCase",
]

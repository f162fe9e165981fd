from .attempt import AttemptState, QuizAttempt, RecordedAnswer

__all__ = ["AttemptState", "QuizAttempt", "RecordedAnswer"]

"""Application exception hierarchy for lingocert."""


class LingocertError(Exception):
    """Base exception for all application-level lingocert errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(LingocertError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class AttemptNotFoundError(NotFoundError):
    """Quiz attempt not found error."""

    def __init__(self, attempt_id: int) -> None:
        self.attempt_id = attempt_id
        super().__init__(f"Attempt with id {attempt_id} not found")


class QuizNotFoundError(NotFoundError):
    """Quiz not found error."""

    def __init__(self, quiz_id: int) -> None:
        self.quiz_id = quiz_id
        super().__init__(f"Quiz with id {quiz_id} not found")


class CourseNotFoundError(NotFoundError):
    """Course not found error."""

    def __init__(self, course_id: int) -> None:
        self.course_id = course_id
        super().__init__(f"Course with id {course_id} not found")


class LearnerNotFoundError(NotFoundError):
    """Learner not found error."""

    def __init__(self, learner_id: int) -> None:
        self.learner_id = learner_id
        super().__init__(f"Learner with id {learner_id} not found")


class CertificateNotFoundError(NotFoundError):
    """
    Certificate not found error.

    The message never echoes the requested identifier or anything about
    the learner, so lookups reveal nothing about learner identities.
    """

    def __init__(self) -> None:
        super().__init__("Certificate not found")

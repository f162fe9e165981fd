"""Data transfer objects returned by assessment use cases."""

from dataclasses import dataclass

from lingocert.domain.assessment.entities import QuizAttempt
from lingocert.domain.certification.entities import Certificate
from lingocert.domain.progress.entities import CourseStanding


@dataclass(frozen=True)
class SubmissionOutcome:
    """A scored attempt plus the course-level effects of scoring it."""

    attempt: QuizAttempt
    standing: CourseStanding | None
    certificate: Certificate | None
    newly_scored: bool


@dataclass(frozen=True)
class AttemptStatistics:
    """Aggregate figures over a learner's attempts."""

    total_attempts: int
    scored_attempts: int
    passed_attempts: int
    failed_attempts: int
    average_score: float
    pass_rate: float
    quizzes_attempted: int
    quizzes_passed: int

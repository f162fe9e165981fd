"""
CourseStanding aggregate root.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from lingocert.domain.common.aggregate_root import AggregateRoot
from lingocert.domain.common.exceptions import InvariantViolationError
from lingocert.domain.common.value_object import ValueObject
from lingocert.domain.common.value_objects import CourseId, CourseStandingId, LearnerId, QuizId
from lingocert.domain.progress.events import CourseCompleted


@dataclass(frozen=True)
class QuizStanding(ValueObject):
    """
    A learner's standing on one required quiz.

    Attributes:
        best_score: Best passing score, 0 when no attempt passed
        latest_score: Score of the most recent scored attempt, None if never scored
        passed: Whether any scored attempt passed
        weight: Weight of the quiz in the overall average
    """

    quiz_id: QuizId
    best_score: int
    latest_score: int | None
    passed: bool
    attempt_count: int
    weight: int


@dataclass(eq=False)
class CourseStanding(AggregateRoot[CourseStandingId]):
    """
    A learner's aggregate progress on a course.

    Business Rules:
    - Recomputed from the full attempt history, never incrementally appended
    - completed is true iff completion_percent is 100
    """

    id: CourseStandingId
    learner_id: LearnerId
    course_id: CourseId
    quiz_standings: tuple[QuizStanding, ...]
    completion_percent: int
    overall_score: int
    proficiency_level: str
    completed: bool
    computed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not 0 <= self.completion_percent <= 100:
            raise InvariantViolationError("CourseStanding", "completion must be within 0..100")
        if self.completed != (self.completion_percent == 100):
            raise InvariantViolationError(
                "CourseStanding", "completed must match 100% completion"
            )

    def same_standing_as(self, other: "CourseStanding") -> bool:
        """Compare computed content, ignoring identity and timestamps."""
        return (
            self.learner_id == other.learner_id
            and self.course_id == other.course_id
            and self.quiz_standings == other.quiz_standings
            and self.completion_percent == other.completion_percent
            and self.overall_score == other.overall_score
            and self.proficiency_level == other.proficiency_level
            and self.completed == other.completed
        )

    def replace_with(self, recomputed: "CourseStanding") -> bool:
        """
        Take over the recomputed values, keeping this standing's identity.

        Returns:
            True if anything changed
        """
        if self.same_standing_as(recomputed):
            return False
        newly_completed = recomputed.completed and not self.completed
        self.quiz_standings = recomputed.quiz_standings
        self.completion_percent = recomputed.completion_percent
        self.overall_score = recomputed.overall_score
        self.proficiency_level = recomputed.proficiency_level
        self.completed = recomputed.completed
        self.computed_at = recomputed.computed_at
        if newly_completed:
            self._record_completion()
        return True

    def _record_completion(self) -> None:
        self._record_event(
            CourseCompleted(
                learner_id=self.learner_id.value,
                course_id=self.course_id.value,
                overall_score=self.overall_score,
                proficiency_level=self.proficiency_level,
            )
        )

    def quiz_standing(self, quiz_id: QuizId) -> QuizStanding | None:
        for standing in self.quiz_standings:
            if standing.quiz_id == quiz_id:
                return standing
        return None

    @classmethod
    def create(
        cls,
        learner_id: LearnerId,
        course_id: CourseId,
        quiz_standings: tuple[QuizStanding, ...],
        completion_percent: int,
        overall_score: int,
        proficiency_level: str,
        computed_at: datetime | None = None,
    ) -> "CourseStanding":
        """Build a freshly computed standing (ID will be 0 until persisted)."""
        standing = cls(
            id=CourseStandingId.generate(),
            learner_id=learner_id,
            course_id=course_id,
            quiz_standings=quiz_standings,
            completion_percent=completion_percent,
            overall_score=overall_score,
            proficiency_level=proficiency_level,
            completed=completion_percent == 100,
            computed_at=computed_at or datetime.now(UTC),
        )
        if standing.completed:
            standing._record_completion()
        return standing

    @classmethod
    def create_with_id(
        cls,
        id: CourseStandingId,
        learner_id: LearnerId,
        course_id: CourseId,
        quiz_standings: tuple[QuizStanding, ...],
        completion_percent: int,
        overall_score: int,
        proficiency_level: str,
        completed: bool,
        computed_at: datetime,
    ) -> "CourseStanding":
        """Reconstitute a standing from persistence."""
        return cls(
            id=id,
            learner_id=learner_id,
            course_id=course_id,
            quiz_standings=quiz_standings,
            completion_percent=completion_percent,
            overall_score=overall_score,
            proficiency_level=proficiency_level,
            completed=completed,
            computed_at=computed_at,
        )

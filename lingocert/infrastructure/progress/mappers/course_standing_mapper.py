"""Mapper for CourseStanding ORM ↔ Domain conversion."""

from typing import Any

from lingocert.domain.common.value_objects import (
    CourseId,
    CourseStandingId,
    LearnerId,
    QuizId,
)
from lingocert.domain.progress.entities import CourseStanding, QuizStanding
from lingocert.models import CourseStanding as CourseStandingORM
from lingocert.utils import ensure_utc


class CourseStandingMapper:
    """Mapper for CourseStanding ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CourseStandingORM) -> CourseStanding:
        return CourseStanding.create_with_id(
            id=CourseStandingId(orm_model.id),
            learner_id=LearnerId(orm_model.learner_id),
            course_id=CourseId(orm_model.course_id),
            quiz_standings=tuple(self._quiz_standing(row) for row in orm_model.quiz_standings),
            completion_percent=orm_model.completion_percent,
            overall_score=orm_model.overall_score,
            proficiency_level=orm_model.proficiency_level,
            completed=orm_model.completed,
            computed_at=ensure_utc(orm_model.computed_at),
        )

    def to_orm(
        self, domain_entity: CourseStanding, orm_model: CourseStandingORM | None = None
    ) -> CourseStandingORM:
        quiz_standings = [self._quiz_standing_row(s) for s in domain_entity.quiz_standings]
        if orm_model:
            # Update existing
            orm_model.quiz_standings = quiz_standings
            orm_model.completion_percent = domain_entity.completion_percent
            orm_model.overall_score = domain_entity.overall_score
            orm_model.proficiency_level = domain_entity.proficiency_level
            orm_model.completed = domain_entity.completed
            orm_model.computed_at = domain_entity.computed_at
            return orm_model

        # Create new
        return CourseStandingORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            learner_id=domain_entity.learner_id.value,
            course_id=domain_entity.course_id.value,
            quiz_standings=quiz_standings,
            completion_percent=domain_entity.completion_percent,
            overall_score=domain_entity.overall_score,
            proficiency_level=domain_entity.proficiency_level,
            completed=domain_entity.completed,
            computed_at=domain_entity.computed_at,
        )

    @staticmethod
    def _quiz_standing(row: dict[str, Any]) -> QuizStanding:
        return QuizStanding(
            quiz_id=QuizId(row["quiz_id"]),
            best_score=row["best_score"],
            latest_score=row["latest_score"],
            passed=row["passed"],
            attempt_count=row["attempt_count"],
            weight=row["weight"],
        )

    @staticmethod
    def _quiz_standing_row(standing: QuizStanding) -> dict[str, Any]:
        return {
            "quiz_id": standing.quiz_id.value,
            "best_score": standing.best_score,
            "latest_score": standing.latest_score,
            "passed": standing.passed,
            "attempt_count": standing.attempt_count,
            "weight": standing.weight,
        }

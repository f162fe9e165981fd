"""Repository for CourseStanding aggregates."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lingocert.domain.common.exceptions import ConcurrentConflictError
from lingocert.domain.common.value_objects import CourseId, LearnerId
from lingocert.domain.progress.entities import CourseStanding
from lingocert.infrastructure.progress.mappers.course_standing_mapper import (
    CourseStandingMapper,
)
from lingocert.models import CourseStanding as CourseStandingORM


class CourseStandingRepository:
    """Repository for CourseStanding aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CourseStandingMapper()

    def find(self, learner_id: LearnerId, course_id: CourseId) -> CourseStanding | None:
        stmt = (
            select(CourseStandingORM)
            .where(
                CourseStandingORM.learner_id == learner_id.value,
                CourseStandingORM.course_id == course_id.value,
            )
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, standing: CourseStanding) -> CourseStanding:
        """
        Save a standing (create or update). Flushes, never commits.

        Raises:
            ConcurrentConflictError: If another recompute created the row first
        """
        if standing.id.value == 0:
            orm_model = self.mapper.to_orm(standing)
            self.db.add(orm_model)
        else:
            existing = self.db.get(CourseStandingORM, standing.id.value)
            if not existing:
                raise ValueError(f"Course standing {standing.id.value} not found")
            orm_model = self.mapper.to_orm(standing, existing)

        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConcurrentConflictError(
                "course_standing",
                {"learner_id": standing.learner_id.value, "course_id": standing.course_id.value},
            ) from e
        return self.mapper.to_domain(orm_model)

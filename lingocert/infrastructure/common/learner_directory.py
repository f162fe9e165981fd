"""Learner profile lookups backed by the users table."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from lingocert.domain.certification.entities import LearnerSnapshot
from lingocert.domain.common.value_objects import LearnerId
from lingocert.models import User as UserORM


class LearnerDirectory:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_profile(self, learner_id: LearnerId) -> LearnerSnapshot | None:
        orm_model = self.db.execute(
            select(UserORM).where(UserORM.id == learner_id.value)
        ).scalar_one_or_none()
        if orm_model is None:
            return None
        return LearnerSnapshot(learner_id=learner_id, name=orm_model.name, email=orm_model.email)

"""Repository for QuizAttempt aggregates."""

from collections.abc import Collection

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from lingocert.application.common.pagination import Pagination
from lingocert.domain.assessment.entities import AttemptState, QuizAttempt, RecordedAnswer
from lingocert.domain.assessment.entities.attempt import ACTIVE_STATES
from lingocert.domain.common.exceptions import ConcurrentConflictError
from lingocert.domain.common.value_objects import AttemptId, LearnerId, QuizId
from lingocert.domain.progress.value_objects import ScoredAttemptSummary
from lingocert.infrastructure.assessment.mappers.attempt_mapper import AttemptMapper
from lingocert.models import AttemptAnswer as AttemptAnswerORM
from lingocert.models import QuizAttempt as QuizAttemptORM

ACTIVE_STATE_VALUES = sorted(state.value for state in ACTIVE_STATES)


class AttemptRepository:
    """
    Repository for QuizAttempt aggregates.

    State transitions are conditional UPDATEs guarded by the expected
    source states; a zero rowcount means a concurrent request moved the
    attempt first. Nothing here commits.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = AttemptMapper()

    def find_by_id(self, attempt_id: AttemptId, for_update: bool = False) -> QuizAttempt | None:
        stmt = (
            select(QuizAttemptORM)
            .where(QuizAttemptORM.id == attempt_id.value)
            .options(selectinload(QuizAttemptORM.answers))
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update(of=QuizAttemptORM)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_active(self, learner_id: LearnerId, quiz_id: QuizId) -> QuizAttempt | None:
        stmt = (
            select(QuizAttemptORM)
            .where(
                QuizAttemptORM.learner_id == learner_id.value,
                QuizAttemptORM.quiz_id == quiz_id.value,
                QuizAttemptORM.state.in_(ACTIVE_STATE_VALUES),
            )
            .options(selectinload(QuizAttemptORM.answers))
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def add(self, attempt: QuizAttempt) -> QuizAttempt:
        """
        Insert a new attempt.

        On conflict the session must be rolled back by the caller.

        Raises:
            ConcurrentConflictError: If an active attempt already exists
                for the learner and quiz
        """
        orm_model = self.mapper.to_orm(attempt)
        self.db.add(orm_model)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConcurrentConflictError(
                "quiz_attempt",
                {"learner_id": attempt.learner_id.value, "quiz_id": attempt.quiz_id.value},
            ) from e
        return self.mapper.to_domain(orm_model)

    def mark_in_progress(self, attempt_id: AttemptId) -> bool:
        result = self.db.execute(
            update(QuizAttemptORM)
            .where(
                QuizAttemptORM.id == attempt_id.value,
                QuizAttemptORM.state.in_(ACTIVE_STATE_VALUES),
            )
            .values(state=AttemptState.IN_PROGRESS.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    def save_answer(self, attempt_id: AttemptId, answer: RecordedAnswer) -> RecordedAnswer:
        """
        Insert or replace the answer row for (attempt, question).

        Call after mark_in_progress: its row lock on the attempt serializes
        concurrent answers to the same attempt.
        """
        stmt = (
            select(AttemptAnswerORM)
            .where(
                AttemptAnswerORM.attempt_id == attempt_id.value,
                AttemptAnswerORM.question_id == answer.question_id.value,
            )
            .execution_options(populate_existing=True)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        values = self.mapper.answer_values(answer)

        if orm_model is None:
            orm_model = AttemptAnswerORM(
                attempt_id=attempt_id.value, question_id=answer.question_id.value, **values
            )
            self.db.add(orm_model)
        else:
            for key, value in values.items():
                setattr(orm_model, key, value)

        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConcurrentConflictError(
                "attempt_answer",
                {"attempt_id": attempt_id.value, "question_id": answer.question_id.value},
            ) from e
        return self.mapper.answer_to_domain(orm_model)

    def mark_scored(self, attempt: QuizAttempt) -> bool:
        if attempt.result is None:
            raise ValueError(f"Attempt {attempt.id.value} has no score result to store")
        result = self.db.execute(
            update(QuizAttemptORM)
            .where(
                QuizAttemptORM.id == attempt.id.value,
                QuizAttemptORM.state.in_(ACTIVE_STATE_VALUES),
            )
            .values(
                state=AttemptState.SCORED.value,
                submitted_at=attempt.submitted_at,
                scored_at=attempt.scored_at,
                **self.mapper.result_values(attempt.result),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    def mark_abandoned(self, attempt: QuizAttempt) -> bool:
        result = self.db.execute(
            update(QuizAttemptORM)
            .where(
                QuizAttemptORM.id == attempt.id.value,
                QuizAttemptORM.state.in_(ACTIVE_STATE_VALUES),
            )
            .values(state=AttemptState.ABANDONED.value, abandoned_at=attempt.abandoned_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    def list_for_learner(
        self, learner_id: LearnerId, quiz_id: QuizId | None, pagination: Pagination
    ) -> tuple[list[QuizAttempt], int]:
        conditions = [QuizAttemptORM.learner_id == learner_id.value]
        if quiz_id is not None:
            conditions.append(QuizAttemptORM.quiz_id == quiz_id.value)

        total = (
            self.db.execute(select(func.count(QuizAttemptORM.id)).where(*conditions)).scalar()
            or 0
        )
        stmt = (
            select(QuizAttemptORM)
            .where(*conditions)
            .options(selectinload(QuizAttemptORM.answers))
            .order_by(QuizAttemptORM.started_at.desc(), QuizAttemptORM.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models], total

    def count_for_learner(self, learner_id: LearnerId) -> int:
        stmt = select(func.count(QuizAttemptORM.id)).where(
            QuizAttemptORM.learner_id == learner_id.value
        )
        return self.db.execute(stmt).scalar() or 0

    def scored_summaries(
        self, learner_id: LearnerId, quiz_ids: Collection[QuizId] | None = None
    ) -> list[ScoredAttemptSummary]:
        stmt = select(QuizAttemptORM).where(
            QuizAttemptORM.learner_id == learner_id.value,
            QuizAttemptORM.state == AttemptState.SCORED.value,
        )
        if quiz_ids is not None:
            stmt = stmt.where(QuizAttemptORM.quiz_id.in_([q.value for q in quiz_ids]))
        stmt = stmt.order_by(QuizAttemptORM.scored_at, QuizAttemptORM.id)
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_summary(orm) for orm in orm_models]

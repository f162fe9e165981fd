"""Mapper for QuizAttempt ORM ↔ Domain conversion."""

from lingocert.domain.assessment.entities import AttemptState, QuizAttempt, RecordedAnswer
from lingocert.domain.assessment.value_objects import Correctness, ScoreResult
from lingocert.domain.common.value_objects import (
    AnswerId,
    AttemptId,
    LearnerId,
    OptionId,
    QuestionId,
    QuizId,
)
from lingocert.domain.progress.value_objects import ScoredAttemptSummary
from lingocert.models import AttemptAnswer as AttemptAnswerORM
from lingocert.models import QuizAttempt as QuizAttemptORM
from lingocert.utils import ensure_utc


class AttemptMapper:
    """Mapper for QuizAttempt ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: QuizAttemptORM) -> QuizAttempt:
        """Convert ORM model (with answers loaded) to domain entity."""
        return QuizAttempt.create_with_id(
            id=AttemptId(orm_model.id),
            learner_id=LearnerId(orm_model.learner_id),
            quiz_id=QuizId(orm_model.quiz_id),
            state=AttemptState(orm_model.state),
            started_at=ensure_utc(orm_model.started_at),
            answers=[self.answer_to_domain(answer) for answer in orm_model.answers],
            submitted_at=ensure_utc(orm_model.submitted_at) if orm_model.submitted_at else None,
            scored_at=ensure_utc(orm_model.scored_at) if orm_model.scored_at else None,
            abandoned_at=ensure_utc(orm_model.abandoned_at) if orm_model.abandoned_at else None,
            result=self._result_to_domain(orm_model),
        )

    def to_orm(self, domain_entity: QuizAttempt) -> QuizAttemptORM:
        """Convert a new domain attempt to an ORM model (answers are written separately)."""
        return QuizAttemptORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            learner_id=domain_entity.learner_id.value,
            quiz_id=domain_entity.quiz_id.value,
            state=domain_entity.state.value,
            started_at=domain_entity.started_at,
            submitted_at=domain_entity.submitted_at,
            scored_at=domain_entity.scored_at,
            abandoned_at=domain_entity.abandoned_at,
        )

    def answer_to_domain(self, orm_model: AttemptAnswerORM) -> RecordedAnswer:
        return RecordedAnswer(
            id=AnswerId(orm_model.id),
            question_id=QuestionId(orm_model.question_id),
            selected_option_ids=frozenset(OptionId(o) for o in orm_model.selected_option_ids),
            correctness=Correctness(
                is_correct=orm_model.is_correct,
                correct_option_ids=frozenset(OptionId(o) for o in orm_model.correct_option_ids),
            ),
            answered_at=ensure_utc(orm_model.answered_at),
        )

    def answer_values(self, answer: RecordedAnswer) -> dict[str, object]:
        """Column values of an answer row, option ids sorted for stable storage."""
        return {
            "selected_option_ids": sorted(o.value for o in answer.selected_option_ids),
            "correct_option_ids": sorted(
                o.value for o in answer.correctness.correct_option_ids
            ),
            "is_correct": answer.is_correct,
            "answered_at": answer.answered_at,
        }

    def result_values(self, result: ScoreResult) -> dict[str, object]:
        return {
            "correct_count": result.correct_count,
            "total_questions": result.total_questions,
            "percent_correct": result.percent_correct,
            "min_passing_score": result.min_passing_score,
            "passed": result.passed,
        }

    def to_summary(self, orm_model: QuizAttemptORM) -> ScoredAttemptSummary:
        """Project a scored attempt row onto what progress aggregation needs."""
        if orm_model.percent_correct is None or orm_model.scored_at is None:
            raise ValueError(f"Attempt {orm_model.id} has no stored score")
        return ScoredAttemptSummary(
            attempt_id=AttemptId(orm_model.id),
            quiz_id=QuizId(orm_model.quiz_id),
            percent_correct=orm_model.percent_correct,
            passed=bool(orm_model.passed),
            scored_at=ensure_utc(orm_model.scored_at),
        )

    @staticmethod
    def _result_to_domain(orm_model: QuizAttemptORM) -> ScoreResult | None:
        if orm_model.percent_correct is None:
            return None
        return ScoreResult(
            correct_count=orm_model.correct_count or 0,
            total_questions=orm_model.total_questions or 0,
            percent_correct=orm_model.percent_correct,
            min_passing_score=orm_model.min_passing_score or 0,
            passed=bool(orm_model.passed),
        )

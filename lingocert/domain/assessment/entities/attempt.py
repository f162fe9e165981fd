"""
QuizAttempt aggregate root.

State machine:

    STARTED -> IN_PROGRESS -> SUBMITTED -> SCORED
    STARTED | IN_PROGRESS -> ABANDONED

SUBMITTED only exists inside the submit transaction; it is never
persisted on its own.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from lingocert.domain.assessment.events import AttemptAbandoned, AttemptScored, AttemptStarted
from lingocert.domain.assessment.exceptions import (
    IncompleteAttemptError,
    InvalidAttemptStateError,
    UnknownQuestionError,
)
from lingocert.domain.assessment.services.answer_evaluator import AnswerEvaluator
from lingocert.domain.assessment.services.quiz_scorer import QuizScorer
from lingocert.domain.assessment.value_objects import Correctness, QuizDefinition, ScoreResult
from lingocert.domain.common.aggregate_root import AggregateRoot
from lingocert.domain.common.exceptions import InvariantViolationError
from lingocert.domain.common.value_objects import (
    AnswerId,
    AttemptId,
    LearnerId,
    OptionId,
    QuestionId,
    QuizId,
)


class AttemptState(StrEnum):
    STARTED = "started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    SCORED = "scored"
    ABANDONED = "abandoned"


ACTIVE_STATES = frozenset({AttemptState.STARTED, AttemptState.IN_PROGRESS})
TERMINAL_STATES = frozenset({AttemptState.SCORED, AttemptState.ABANDONED})


@dataclass(frozen=True)
class RecordedAnswer:
    """An answer with its frozen verdict. Replaced, never edited."""

    question_id: QuestionId
    selected_option_ids: frozenset[OptionId]
    correctness: Correctness
    answered_at: datetime
    id: AnswerId = field(default_factory=AnswerId.generate)

    @property
    def is_correct(self) -> bool:
        return self.correctness.is_correct


@dataclass(eq=False)
class QuizAttempt(AggregateRoot[AttemptId]):
    """
    One learner's pass through one quiz.

    Business Rules:
    - Answers may be recorded only while STARTED or IN_PROGRESS
    - Re-answering a question replaces the prior answer
    - Submission requires every question of the quiz to be answered
    - Submitting a scored attempt returns the stored result unchanged
    - Abandoning a finished attempt is a no-op
    """

    id: AttemptId
    learner_id: LearnerId
    quiz_id: QuizId
    state: AttemptState
    started_at: datetime
    answers: dict[QuestionId, RecordedAnswer] = field(default_factory=dict)
    submitted_at: datetime | None = None
    scored_at: datetime | None = None
    abandoned_at: datetime | None = None
    result: ScoreResult | None = None

    def __post_init__(self) -> None:
        if self.state is AttemptState.SCORED and self.result is None:
            raise InvariantViolationError("QuizAttempt", "scored attempt must carry a result")

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def ordered_answers(self) -> list[RecordedAnswer]:
        return sorted(self.answers.values(), key=lambda answer: answer.answered_at)

    def record_answer(
        self,
        quiz: QuizDefinition,
        question_id: QuestionId,
        selected_option_ids: Iterable[OptionId],
        evaluator: AnswerEvaluator,
        answered_at: datetime | None = None,
    ) -> RecordedAnswer:
        """
        Evaluate and record an answer, replacing any earlier one for the question.

        Raises:
            InvalidAttemptStateError: If the attempt is not active
            UnknownQuestionError: If the question is not part of the quiz
            UnknownOptionError: If a selected option is not offered by the question
        """
        self._require_active("record an answer for")
        self._require_quiz(quiz)

        question = quiz.find_question(question_id)
        if question is None:
            raise UnknownQuestionError(question_id.value, self.quiz_id.value)

        selection = frozenset(selected_option_ids)
        correctness = evaluator.evaluate(quiz, question, selection)
        previous = self.answers.get(question_id)
        answer = RecordedAnswer(
            id=previous.id if previous else AnswerId.generate(),
            question_id=question_id,
            selected_option_ids=selection,
            correctness=correctness,
            answered_at=answered_at or datetime.now(UTC),
        )
        self.answers[question_id] = answer
        self.state = AttemptState.IN_PROGRESS
        return answer

    def submit(
        self,
        quiz: QuizDefinition,
        scorer: QuizScorer,
        submitted_at: datetime | None = None,
    ) -> ScoreResult:
        """
        Commit the answers and score them.

        Raises:
            InvalidAttemptStateError: If the attempt was abandoned
            IncompleteAttemptError: If a question has no recorded answer
            InvalidQuizDefinitionError: If the quiz has no questions
        """
        if self.state is AttemptState.SCORED and self.result is not None:
            return self.result
        self._require_active("submit")
        self._require_quiz(quiz)

        missing = [qid.value for qid in quiz.question_ids if qid not in self.answers]
        if missing:
            raise IncompleteAttemptError(self.id.value, missing)

        now = submitted_at or datetime.now(UTC)
        verdicts = {qid: answer.correctness for qid, answer in self.answers.items()}
        result = scorer.score(quiz, verdicts)

        self.state = AttemptState.SUBMITTED
        self.submitted_at = now
        self.result = result
        self.state = AttemptState.SCORED
        self.scored_at = now
        self._record_event(
            AttemptScored(
                attempt_id=self.id.value,
                learner_id=self.learner_id.value,
                quiz_id=self.quiz_id.value,
                percent_correct=result.percent_correct,
                passed=result.passed,
            )
        )
        return result

    def abandon(self, abandoned_at: datetime | None = None) -> bool:
        """
        Abandon an active attempt.

        Returns:
            True if the attempt changed state, False if it was already finished
        """
        if self.is_terminal:
            return False
        self._require_active("abandon")
        self.state = AttemptState.ABANDONED
        self.abandoned_at = abandoned_at or datetime.now(UTC)
        self._record_event(
            AttemptAbandoned(
                attempt_id=self.id.value,
                learner_id=self.learner_id.value,
                quiz_id=self.quiz_id.value,
            )
        )
        return True

    def _require_active(self, action: str) -> None:
        if not self.is_active:
            raise InvalidAttemptStateError(
                self.id.value, self.state.value, (s.value for s in ACTIVE_STATES), action
            )

    def _require_quiz(self, quiz: QuizDefinition) -> None:
        if quiz.id != self.quiz_id:
            raise InvariantViolationError(
                "QuizAttempt", f"attempt belongs to quiz {self.quiz_id}, not {quiz.id}"
            )

    @classmethod
    def start(
        cls,
        learner_id: LearnerId,
        quiz_id: QuizId,
        started_at: datetime | None = None,
    ) -> "QuizAttempt":
        """Create a new attempt in STARTED (ID will be 0 until persisted)."""
        attempt = cls(
            id=AttemptId.generate(),
            learner_id=learner_id,
            quiz_id=quiz_id,
            state=AttemptState.STARTED,
            started_at=started_at or datetime.now(UTC),
        )
        attempt._record_event(AttemptStarted(learner_id=learner_id.value, quiz_id=quiz_id.value))
        return attempt

    @classmethod
    def create_with_id(
        cls,
        id: AttemptId,
        learner_id: LearnerId,
        quiz_id: QuizId,
        state: AttemptState,
        started_at: datetime,
        answers: Iterable[RecordedAnswer] = (),
        submitted_at: datetime | None = None,
        scored_at: datetime | None = None,
        abandoned_at: datetime | None = None,
        result: ScoreResult | None = None,
    ) -> "QuizAttempt":
        """Reconstitute an attempt from persistence."""
        return cls(
            id=id,
            learner_id=learner_id,
            quiz_id=quiz_id,
            state=state,
            started_at=started_at,
            answers={answer.question_id: answer for answer in answers},
            submitted_at=submitted_at,
            scored_at=scored_at,
            abandoned_at=abandoned_at,
            result=result,
        )

"""Protocol for QuizAttempt persistence."""

from collections.abc import Collection
from typing import Protocol

from lingocert.application.common.pagination import Pagination
from lingocert.domain.assessment.entities import QuizAttempt, RecordedAnswer
from lingocert.domain.common.value_objects import AttemptId, LearnerId, QuizId
from lingocert.domain.progress.value_objects import ScoredAttemptSummary


class AttemptRepositoryProtocol(Protocol):
    """Protocol for attempt storage.

    Writes are flushed, never committed; the caller's unit of work owns
    the transaction.
    """

    def find_by_id(self, attempt_id: AttemptId, for_update: bool = False) -> QuizAttempt | None:
        """
        Find an attempt with its answers.

        Args:
            attempt_id: The attempt ID
            for_update: Lock the attempt row until the transaction ends

        Returns:
            QuizAttempt if found, None otherwise
        """
        ...

    def find_active(self, learner_id: LearnerId, quiz_id: QuizId) -> QuizAttempt | None:
        """Find the attempt in STARTED or IN_PROGRESS for (learner, quiz), if any."""
        ...

    def add(self, attempt: QuizAttempt) -> QuizAttempt:
        """
        Insert a new attempt.

        Raises:
            ConcurrentConflictError: If another active attempt was inserted first
        """
        ...

    def mark_in_progress(self, attempt_id: AttemptId) -> bool:
        """
        Move an active attempt to IN_PROGRESS.

        Returns:
            False if the attempt is no longer active
        """
        ...

    def save_answer(self, attempt_id: AttemptId, answer: RecordedAnswer) -> RecordedAnswer:
        """Insert or replace the answer for one question (last write wins)."""
        ...

    def mark_scored(self, attempt: QuizAttempt) -> bool:
        """
        Store the score result if the attempt is still active.

        Returns:
            False if another request already moved the attempt out of an active state
        """
        ...

    def mark_abandoned(self, attempt: QuizAttempt) -> bool:
        """Store the abandonment if the attempt is still active."""
        ...

    def list_for_learner(
        self, learner_id: LearnerId, quiz_id: QuizId | None, pagination: Pagination
    ) -> tuple[list[QuizAttempt], int]:
        """List a learner's attempts newest first, with the total count."""
        ...

    def count_for_learner(self, learner_id: LearnerId) -> int:
        """Number of attempts a learner has started, in any state."""
        ...

    def scored_summaries(
        self, learner_id: LearnerId, quiz_ids: Collection[QuizId] | None = None
    ) -> list[ScoredAttemptSummary]:
        """Scored attempts of a learner, optionally restricted to some quizzes."""
        ...

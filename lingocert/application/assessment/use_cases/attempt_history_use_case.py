"""Use case for browsing a learner's attempt history."""

from lingocert.application.assessment.dtos import AttemptStatistics
from lingocert.application.assessment.protocols import AttemptRepositoryProtocol
from lingocert.application.common.pagination import PaginatedResult, Pagination
from lingocert.domain.assessment.entities import QuizAttempt
from lingocert.domain.common.value_objects import LearnerId, QuizId


class AttemptHistoryUseCase:
    """Read-side queries over a learner's attempts."""

    def __init__(self, attempt_repository: AttemptRepositoryProtocol) -> None:
        self.attempt_repository = attempt_repository

    def list_attempts(
        self,
        learner_id: int,
        quiz_id: int | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> PaginatedResult[QuizAttempt]:
        """
        List attempts newest first, optionally for a single quiz.

        Raises:
            ValueError: If the paging parameters are out of range
        """
        pagination = Pagination(page=page, page_size=page_size)
        items, total = self.attempt_repository.list_for_learner(
            LearnerId(learner_id),
            QuizId(quiz_id) if quiz_id is not None else None,
            pagination,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def get_statistics(self, learner_id: int) -> AttemptStatistics:
        """
        Summarize a learner's attempts.

        total_attempts counts every attempt, including in-progress and abandoned
        ones. The remaining figures cover scored attempts only, and averages are
        0.0 when nothing was scored.
        """
        learner = LearnerId(learner_id)
        summaries = self.attempt_repository.scored_summaries(learner)

        scored = len(summaries)
        passed = sum(1 for summary in summaries if summary.passed)
        average = sum(s.percent_correct for s in summaries) / scored if scored else 0.0

        return AttemptStatistics(
            total_attempts=self.attempt_repository.count_for_learner(learner),
            scored_attempts=scored,
            passed_attempts=passed,
            failed_attempts=scored - passed,
            average_score=round(average, 2),
            pass_rate=round(passed * 100 / scored, 2) if scored else 0.0,
            quizzes_attempted=len({summary.quiz_id for summary in summaries}),
            quizzes_passed=len({summary.quiz_id for summary in summaries if summary.passed}),
        )

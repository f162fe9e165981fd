"""Domain service rolling scored attempts up into a course standing."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime
from fractions import Fraction

from lingocert.domain.assessment.value_objects import CourseDefinition, QuizDefinition
from lingocert.domain.common.percentages import percent_of, round_half_up
from lingocert.domain.common.value_objects import LearnerId, QuizId
from lingocert.domain.progress.entities import CourseStanding, QuizStanding
from lingocert.domain.progress.value_objects import ProficiencyScale, ScoredAttemptSummary


class ProgressAggregator:
    """Computes a CourseStanding from a learner's scored attempts.

    The result depends only on the course snapshot and the attempt set,
    so recomputing with unchanged inputs is a fixed point.
    """

    def __init__(self, scale: ProficiencyScale) -> None:
        self.scale = scale

    def recompute(
        self,
        learner_id: LearnerId,
        course: CourseDefinition,
        attempts: Iterable[ScoredAttemptSummary],
        computed_at: datetime | None = None,
    ) -> CourseStanding:
        by_quiz: dict[QuizId, list[ScoredAttemptSummary]] = defaultdict(list)
        for attempt in attempts:
            by_quiz[attempt.quiz_id].append(attempt)

        required = course.required_quizzes
        quiz_standings = tuple(
            self._quiz_standing(quiz, by_quiz.get(quiz.id, [])) for quiz in required
        )

        if not required:
            completion = 0
        else:
            passed_count = sum(1 for standing in quiz_standings if standing.passed)
            completion = percent_of(passed_count, len(required))
            if passed_count < len(required):
                # 100% is reserved for every required quiz passed
                completion = min(completion, 99)

        overall = self._weighted_average(quiz_standings)
        return CourseStanding.create(
            learner_id=learner_id,
            course_id=course.id,
            quiz_standings=quiz_standings,
            completion_percent=completion,
            overall_score=overall,
            proficiency_level=self.scale.level_for(overall),
            computed_at=computed_at,
        )

    @staticmethod
    def _quiz_standing(
        quiz: QuizDefinition, attempts: list[ScoredAttemptSummary]
    ) -> QuizStanding:
        passing = [attempt.percent_correct for attempt in attempts if attempt.passed]
        latest = max(attempts, key=lambda a: (a.scored_at, a.attempt_id.value), default=None)
        return QuizStanding(
            quiz_id=quiz.id,
            best_score=max(passing, default=0),
            latest_score=latest.percent_correct if latest else None,
            passed=bool(passing),
            attempt_count=len(attempts),
            weight=quiz.weight,
        )

    @staticmethod
    def _weighted_average(standings: tuple[QuizStanding, ...]) -> int:
        total_weight = sum(standing.weight for standing in standings)
        if total_weight == 0:
            return 0
        weighted = sum(standing.weight * standing.best_score for standing in standings)
        return round_half_up(Fraction(weighted, total_weight))

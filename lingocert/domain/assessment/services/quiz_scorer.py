"""Domain service aggregating per-question verdicts into an attempt score."""

from collections.abc import Mapping

from lingocert.domain.assessment.exceptions import InvalidQuizDefinitionError
from lingocert.domain.assessment.value_objects import Correctness, QuizDefinition, ScoreResult
from lingocert.domain.common.percentages import percent_of
from lingocert.domain.common.value_objects import QuestionId


class QuizScorer:
    """Scores an attempt against its quiz.

    The denominator is always the quiz's question count: a question without
    a verdict counts as incorrect rather than being dropped.
    """

    def score(
        self, quiz: QuizDefinition, verdicts: Mapping[QuestionId, Correctness]
    ) -> ScoreResult:
        """
        Compute percent correct (rounded half-up) and the pass verdict.

        Raises:
            InvalidQuizDefinitionError: If the quiz has no questions
        """
        total = len(quiz.questions)
        if total == 0:
            raise InvalidQuizDefinitionError(quiz.id.value, "quiz has no questions")

        correct_count = sum(
            1
            for question_id in quiz.question_ids
            if (verdict := verdicts.get(question_id)) is not None and verdict.is_correct
        )
        percent = percent_of(correct_count, total)
        return ScoreResult(
            correct_count=correct_count,
            total_questions=total,
            percent_correct=percent,
            min_passing_score=quiz.min_passing_score,
            passed=percent >= quiz.min_passing_score,
        )

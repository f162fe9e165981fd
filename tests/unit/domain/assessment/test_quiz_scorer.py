"""Tests for QuizScorer domain service."""

import pytest

from lingocert.domain.assessment.exceptions import InvalidQuizDefinitionError
from lingocert.domain.assessment.services import QuizScorer
from lingocert.domain.assessment.value_objects import (
    Correctness,
    OptionSnapshot,
    QuestionSnapshot,
    QuizDefinition,
)
from lingocert.domain.common.value_objects import CourseId, LessonId, OptionId, QuestionId, QuizId


def _quiz(question_count: int, min_passing_score: int = 70) -> QuizDefinition:
    questions = tuple(
        QuestionSnapshot(
            id=QuestionId(n),
            prompt=f"Q{n}",
            options=(OptionSnapshot(id=OptionId(n * 10), text="yes", is_correct=True),),
        )
        for n in range(1, question_count + 1)
    )
    return QuizDefinition(
        id=QuizId(1),
        title="Numbers",
        lesson_id=LessonId(1),
        course_id=CourseId(1),
        min_passing_score=min_passing_score,
        questions=questions,
    )


def _verdicts(quiz: QuizDefinition, correct_count: int) -> dict[QuestionId, Correctness]:
    return {
        question.id: Correctness(
            is_correct=index < correct_count, correct_option_ids=question.correct_option_ids
        )
        for index, question in enumerate(quiz.questions)
    }


@pytest.mark.parametrize("question_count", range(1, 13))
def test_percent_correct_rounds_half_up_for_every_count(question_count: int) -> None:
    quiz = _quiz(question_count)
    scorer = QuizScorer()
    for correct_count in range(question_count + 1):
        result = scorer.score(quiz, _verdicts(quiz, correct_count))
        expected = (200 * correct_count + question_count) // (2 * question_count)
        assert result.percent_correct == expected
        assert result.correct_count == correct_count
        assert result.total_questions == question_count


@pytest.mark.parametrize(
    ("correct_count", "percent", "passed"),
    [(3, 75, True), (2, 50, False), (4, 100, True), (0, 0, False)],
)
def test_four_question_quiz_passing_at_75(correct_count: int, percent: int, passed: bool) -> None:
    quiz = _quiz(4, min_passing_score=75)
    result = QuizScorer().score(quiz, _verdicts(quiz, correct_count))
    assert result.percent_correct == percent
    assert result.passed is passed
    assert result.min_passing_score == 75


def test_exactly_half_rounds_up() -> None:
    # 1 of 8 = 12.5%
    quiz = _quiz(8)
    assert QuizScorer().score(quiz, _verdicts(quiz, 1)).percent_correct == 13


def test_missing_verdict_counts_as_incorrect() -> None:
    quiz = _quiz(3)
    verdicts = _verdicts(quiz, 3)
    del verdicts[QuestionId(3)]
    result = QuizScorer().score(quiz, verdicts)
    assert result.correct_count == 2
    assert result.percent_correct == 67


def test_zero_question_quiz_is_rejected() -> None:
    with pytest.raises(InvalidQuizDefinitionError):
        QuizScorer().score(_quiz(0), {})

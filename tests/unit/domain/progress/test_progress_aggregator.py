"""Tests for ProgressAggregator domain service."""

from datetime import UTC, datetime, timedelta

from lingocert.domain.assessment.value_objects import (
    CourseDefinition,
    LessonDefinition,
    OptionSnapshot,
    QuestionSnapshot,
    QuizDefinition,
)
from lingocert.domain.common.value_objects import (
    AttemptId,
    CourseId,
    LearnerId,
    LessonId,
    OptionId,
    QuestionId,
    QuizId,
)
from lingocert.domain.progress.events import CourseCompleted
from lingocert.domain.progress.services import ProgressAggregator
from lingocert.domain.progress.value_objects import ProficiencyScale, ScoredAttemptSummary

SCALE = ProficiencyScale.from_thresholds({"ADVANCED": 85, "INTERMEDIATE": 60, "BEGINNER": 0})
LEARNER = LearnerId(1)
T0 = datetime(2026, 1, 1, tzinfo=UTC)


def _quiz(quiz_id: int, points: tuple[int, ...] = (1, 1)) -> QuizDefinition:
    questions = tuple(
        QuestionSnapshot(
            id=QuestionId(quiz_id * 100 + n),
            prompt="?",
            options=(OptionSnapshot(id=OptionId(quiz_id * 100 + n), text="x", is_correct=True),),
            points=p,
        )
        for n, p in enumerate(points)
    )
    return QuizDefinition(
        id=QuizId(quiz_id),
        title=f"Quiz {quiz_id}",
        lesson_id=LessonId(quiz_id),
        course_id=CourseId(1),
        min_passing_score=60,
        questions=questions,
    )


def _course(
    required: list[QuizDefinition], optional: list[QuizDefinition] | None = None
) -> CourseDefinition:
    lessons = [
        LessonDefinition(
            id=quiz.lesson_id, title="L", order_index=i, is_required=True, quizzes=(quiz,)
        )
        for i, quiz in enumerate(required)
    ]
    lessons += [
        LessonDefinition(
            id=quiz.lesson_id, title="L", order_index=100 + i, is_required=False, quizzes=(quiz,)
        )
        for i, quiz in enumerate(optional or [])
    ]
    return CourseDefinition(
        id=CourseId(1), title="Spanish", language_name="Spanish", lessons=tuple(lessons)
    )


def _scored(
    attempt_id: int, quiz_id: int, score: int, passed: bool, minutes: int = 0
) -> ScoredAttemptSummary:
    return ScoredAttemptSummary(
        attempt_id=AttemptId(attempt_id),
        quiz_id=QuizId(quiz_id),
        percent_correct=score,
        passed=passed,
        scored_at=T0 + timedelta(minutes=minutes),
    )


def test_no_attempts_is_a_zero_standing() -> None:
    standing = ProgressAggregator(SCALE).recompute(LEARNER, _course([_quiz(1), _quiz(2)]), [])
    assert standing.completion_percent == 0
    assert standing.overall_score == 0
    assert standing.proficiency_level == "BEGINNER"
    assert standing.completed is False
    assert all(q.latest_score is None for q in standing.quiz_standings)
    assert standing.pending_events == []


def test_half_the_required_quizzes_passed() -> None:
    course = _course([_quiz(1), _quiz(2)])
    attempts = [_scored(1, 1, 90, True), _scored(2, 2, 40, False)]

    standing = ProgressAggregator(SCALE).recompute(LEARNER, course, attempts)

    assert standing.completion_percent == 50
    assert standing.completed is False
    # Failed quiz contributes 0 to the weighted average
    assert standing.overall_score == 45


def test_all_required_passed_completes_course_with_weighted_level() -> None:
    course = _course([_quiz(1), _quiz(2)])
    attempts = [_scored(1, 1, 90, True), _scored(2, 2, 70, True)]

    standing = ProgressAggregator(SCALE).recompute(LEARNER, course, attempts)

    assert standing.completion_percent == 100
    assert standing.completed is True
    assert standing.overall_score == 80
    assert standing.proficiency_level == "INTERMEDIATE"
    assert isinstance(standing.pending_events[0], CourseCompleted)


def test_quiz_weight_is_sum_of_question_points() -> None:
    heavy = _quiz(1, points=(3, 3))
    light = _quiz(2, points=(1, 1))
    attempts = [_scored(1, 1, 100, True), _scored(2, 2, 60, True)]

    standing = ProgressAggregator(SCALE).recompute(LEARNER, _course([heavy, light]), attempts)

    # (6 * 100 + 2 * 60) / 8 = 90
    assert standing.overall_score == 90
    assert standing.proficiency_level == "ADVANCED"


def test_weighted_average_rounds_half_up() -> None:
    # (1 * 61 + 1 * 60) / 2 = 60.5
    attempts = [_scored(1, 1, 61, True), _scored(2, 2, 60, True)]
    standing = ProgressAggregator(SCALE).recompute(LEARNER, _course([_quiz(1), _quiz(2)]), attempts)
    assert standing.overall_score == 61


def test_completion_rounds_half_up() -> None:
    quizzes = [_quiz(n) for n in range(1, 9)]
    standing = ProgressAggregator(SCALE).recompute(
        LEARNER, _course(quizzes), [_scored(1, 1, 100, True)]
    )
    # 1 of 8 = 12.5%
    assert standing.completion_percent == 13


def test_best_passing_and_latest_scores_are_tracked_per_quiz() -> None:
    attempts = [
        _scored(1, 1, 95, True, minutes=1),
        _scored(2, 1, 30, False, minutes=2),
        _scored(3, 1, 70, True, minutes=3),
    ]
    standing = ProgressAggregator(SCALE).recompute(LEARNER, _course([_quiz(1)]), attempts)

    quiz_standing = standing.quiz_standing(QuizId(1))
    assert quiz_standing is not None
    assert quiz_standing.best_score == 95
    assert quiz_standing.latest_score == 70
    assert quiz_standing.attempt_count == 3
    assert quiz_standing.passed is True


def test_optional_quizzes_do_not_gate_completion() -> None:
    course = _course([_quiz(1)], optional=[_quiz(9)])
    standing = ProgressAggregator(SCALE).recompute(
        LEARNER, course, [_scored(1, 1, 80, True), _scored(2, 9, 10, False)]
    )
    assert standing.completed is True
    assert standing.overall_score == 80
    assert [q.quiz_id for q in standing.quiz_standings] == [QuizId(1)]


def test_course_without_required_quizzes_is_never_completed() -> None:
    course = _course([], optional=[_quiz(9)])
    standing = ProgressAggregator(SCALE).recompute(LEARNER, course, [_scored(1, 9, 100, True)])
    assert standing.completion_percent == 0
    assert standing.completed is False


def test_recompute_is_a_fixed_point() -> None:
    course = _course([_quiz(1), _quiz(2)])
    attempts = [_scored(1, 1, 90, True), _scored(2, 2, 65, True)]
    aggregator = ProgressAggregator(SCALE)

    first = aggregator.recompute(LEARNER, course, attempts, computed_at=T0)
    second = aggregator.recompute(LEARNER, course, list(reversed(attempts)), computed_at=T0)

    assert first.same_standing_as(second)
    assert first.replace_with(second) is False


def test_one_unpassed_quiz_among_many_never_completes_course() -> None:
    quizzes = [_quiz(n) for n in range(1, 201)]
    attempts = [_scored(n, n, 80, True) for n in range(1, 200)]

    standing = ProgressAggregator(SCALE).recompute(LEARNER, _course(quizzes), attempts)

    # 199 / 200 would round half-up to 100
    assert standing.completion_percent == 99
    assert standing.completed is False
    assert standing.collect_events() == []

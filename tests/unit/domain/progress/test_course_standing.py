"""Tests for the CourseStanding aggregate."""

import pytest

from lingocert.domain.common.exceptions import InvariantViolationError
from lingocert.domain.common.value_objects import CourseId, LearnerId, QuizId
from lingocert.domain.progress.entities import CourseStanding, QuizStanding
from lingocert.domain.progress.events import CourseCompleted


def _standing(completion: int, score: int, level: str) -> CourseStanding:
    return CourseStanding.create(
        learner_id=LearnerId(1),
        course_id=CourseId(2),
        quiz_standings=(
            QuizStanding(
                quiz_id=QuizId(3),
                best_score=score,
                latest_score=score,
                passed=completion == 100,
                attempt_count=1,
                weight=4,
            ),
        ),
        completion_percent=completion,
        overall_score=score,
        proficiency_level=level,
    )


def test_replace_with_records_completion_once() -> None:
    stored = _standing(0, 0, "BEGINNER")
    assert stored.collect_events() == []

    assert stored.replace_with(_standing(100, 70, "INTERMEDIATE")) is True
    assert [type(e) for e in stored.collect_events()] == [CourseCompleted]

    assert stored.replace_with(_standing(100, 90, "ADVANCED")) is True
    assert stored.collect_events() == []
    assert stored.proficiency_level == "ADVANCED"


def test_replace_with_identical_values_changes_nothing() -> None:
    stored = _standing(100, 70, "INTERMEDIATE")
    computed_at = stored.computed_at
    assert stored.replace_with(_standing(100, 70, "INTERMEDIATE")) is False
    assert stored.computed_at == computed_at


def test_completed_flag_must_match_full_completion() -> None:
    standing = _standing(50, 40, "BEGINNER")
    with pytest.raises(InvariantViolationError):
        CourseStanding.create_with_id(
            id=standing.id,
            learner_id=standing.learner_id,
            course_id=standing.course_id,
            quiz_standings=standing.quiz_standings,
            completion_percent=50,
            overall_score=40,
            proficiency_level="BEGINNER",
            completed=True,
            computed_at=standing.computed_at,
        )

"""Tests for IssuancePolicy domain service."""

from datetime import UTC, datetime

from lingocert.domain.certification.entities import Certificate, LearnerSnapshot
from lingocert.domain.certification.services import IssuanceAction, IssuancePolicy
from lingocert.domain.common.value_objects import CourseId, LearnerId
from lingocert.domain.progress.entities import CourseStanding
from lingocert.domain.progress.value_objects import ProficiencyScale

SCALE = ProficiencyScale.from_thresholds({"ADVANCED": 85, "INTERMEDIATE": 60, "BEGINNER": 0})


def _standing(completion: int, score: int) -> CourseStanding:
    return CourseStanding.create(
        learner_id=LearnerId(1),
        course_id=CourseId(2),
        quiz_standings=(),
        completion_percent=completion,
        overall_score=score,
        proficiency_level=SCALE.level_for(score),
    )


def _certificate(level: str) -> Certificate:
    return Certificate.issue(
        certificate_id="LC-00000000000000AA",
        learner=LearnerSnapshot(LearnerId(1), "Ana García", "ana@example.com"),
        course_id=CourseId(2),
        course_title="Spanish",
        language_tested="Spanish",
        proficiency_level=level,
        final_score=70,
        completed_at=datetime.now(UTC),
        certificate_url="https://certs.example.com/LC-00000000000000AA",
    )


def test_incomplete_course_issues_nothing() -> None:
    decision = IssuancePolicy(SCALE).decide(_standing(50, 90), None)
    assert decision.action is IssuanceAction.NONE


def test_first_completion_issues() -> None:
    decision = IssuancePolicy(SCALE).decide(_standing(100, 70), None)
    assert decision.action is IssuanceAction.ISSUE


def test_same_level_keeps_current_certificate() -> None:
    decision = IssuancePolicy(SCALE).decide(_standing(100, 75), _certificate("INTERMEDIATE"))
    assert decision.action is IssuanceAction.KEEP


def test_lower_level_keeps_current_certificate() -> None:
    decision = IssuancePolicy(SCALE).decide(_standing(100, 40), _certificate("INTERMEDIATE"))
    assert decision.action is IssuanceAction.KEEP


def test_higher_level_supersedes() -> None:
    decision = IssuancePolicy(SCALE).decide(_standing(100, 90), _certificate("INTERMEDIATE"))
    assert decision.action is IssuanceAction.SUPERSEDE
    assert "INTERMEDIATE" in decision.reason


def test_no_longer_complete_keeps_existing_certificate() -> None:
    decision = IssuancePolicy(SCALE).decide(_standing(50, 90), _certificate("INTERMEDIATE"))
    assert decision.action is IssuanceAction.KEEP

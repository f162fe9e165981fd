"""Tests for the Certificate aggregate."""

from datetime import UTC, datetime

import pytest

from lingocert.domain.certification.entities import Certificate, LearnerSnapshot
from lingocert.domain.certification.events import CertificateIssued, CertificateSuperseded
from lingocert.domain.common.exceptions import InvariantViolationError
from lingocert.domain.common.value_objects import CertificateRecordId, CourseId, LearnerId

NOW = datetime(2026, 3, 1, tzinfo=UTC)


def _issue(
    certificate_id: str,
    level: str,
    predecessor: Certificate | None = None,
    learner_id: int = 1,
    course_id: int = 2,
) -> Certificate:
    return Certificate.issue(
        certificate_id=certificate_id,
        learner=LearnerSnapshot(LearnerId(learner_id), "Ana García", "ana@example.com"),
        course_id=CourseId(course_id),
        course_title="Spanish for Travellers",
        language_tested="Spanish",
        proficiency_level=level,
        final_score=80,
        completed_at=NOW,
        certificate_url=f"https://certs.example.com/{certificate_id}",
        predecessor=predecessor,
    )


def test_issued_certificate_is_verified_and_current() -> None:
    certificate = _issue("LC-00000000000000AA", "INTERMEDIATE")
    assert certificate.verified is True
    assert certificate.is_current is True
    assert certificate.supersedes_id is None
    events = certificate.collect_events()
    assert isinstance(events[0], CertificateIssued)
    assert events[0].supersedes is None


def test_supersede_retires_old_certificate() -> None:
    old = _issue("LC-00000000000000AA", "INTERMEDIATE")
    old.id = CertificateRecordId(10)
    old.collect_events()

    new = _issue("LC-00000000000000BB", "ADVANCED", predecessor=old)
    old.supersede_with(new, at=NOW)

    assert old.verified is False
    assert old.is_current is False
    assert old.superseded_by == "LC-00000000000000BB"
    assert old.superseded_at == NOW
    assert new.supersedes_id == CertificateRecordId(10)
    assert isinstance(old.collect_events()[0], CertificateSuperseded)
    assert new.collect_events()[0].supersedes == "LC-00000000000000AA"  # type: ignore[attr-defined]


def test_certificate_can_only_be_superseded_once() -> None:
    old = _issue("LC-00000000000000AA", "BEGINNER")
    old.supersede_with(_issue("LC-00000000000000BB", "INTERMEDIATE"))
    with pytest.raises(InvariantViolationError):
        old.supersede_with(_issue("LC-00000000000000CC", "ADVANCED"))


def test_successor_must_share_learner_and_course() -> None:
    old = _issue("LC-00000000000000AA", "BEGINNER")
    with pytest.raises(InvariantViolationError):
        old.supersede_with(_issue("LC-00000000000000BB", "ADVANCED", course_id=3))
    assert old.is_current is True

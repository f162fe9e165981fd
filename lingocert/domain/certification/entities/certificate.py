"""
Certificate aggregate root.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from lingocert.domain.certification.events import CertificateIssued, CertificateSuperseded
from lingocert.domain.common.aggregate_root import AggregateRoot
from lingocert.domain.common.exceptions import InvariantViolationError
from lingocert.domain.common.value_object import ValueObject
from lingocert.domain.common.value_objects import CertificateRecordId, CourseId, LearnerId


@dataclass(frozen=True)
class LearnerSnapshot(ValueObject):
    """Learner display data copied onto a certificate at issuance."""

    learner_id: LearnerId
    name: str
    email: str


@dataclass(eq=False)
class Certificate(AggregateRoot[CertificateRecordId]):
    """
    A verifiable record that a learner reached a proficiency level in a course.

    Business Rules:
    - Issued once per (learner, course); content is never edited afterwards
    - At most one current certificate per (learner, course)
    - Supersession flips verified/is_current off on the old certificate and
      links the new one to it; the old row is kept as an audit trail
    """

    id: CertificateRecordId
    certificate_id: str
    learner: LearnerSnapshot
    course_id: CourseId
    course_title: str
    language_tested: str
    proficiency_level: str
    final_score: int
    completed_at: datetime
    issued_at: datetime
    certificate_url: str
    verified: bool = True
    is_current: bool = True
    supersedes_id: CertificateRecordId | None = None
    superseded_by: str | None = None
    superseded_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.final_score <= 100:
            raise InvariantViolationError("Certificate", "final score must be within 0..100")
        if self.is_current and not self.verified:
            raise InvariantViolationError("Certificate", "current certificate must be verified")

    @property
    def learner_id(self) -> LearnerId:
        return self.learner.learner_id

    def supersede_with(self, successor: "Certificate", at: datetime | None = None) -> None:
        """
        Retire this certificate in favour of a successor.

        Raises:
            InvariantViolationError: If this certificate is already superseded
                or the successor is for another learner or course
        """
        if not self.is_current:
            raise InvariantViolationError(
                "Certificate", "only the current certificate can be superseded"
            )
        if successor.learner_id != self.learner_id or successor.course_id != self.course_id:
            raise InvariantViolationError(
                "Certificate", "successor must share learner and course"
            )
        self.verified = False
        self.is_current = False
        self.superseded_by = successor.certificate_id
        self.superseded_at = at or datetime.now(UTC)
        self._record_event(
            CertificateSuperseded(
                certificate_id=self.certificate_id, superseded_by=successor.certificate_id
            )
        )

    @classmethod
    def issue(
        cls,
        certificate_id: str,
        learner: LearnerSnapshot,
        course_id: CourseId,
        course_title: str,
        language_tested: str,
        proficiency_level: str,
        final_score: int,
        completed_at: datetime,
        certificate_url: str,
        predecessor: "Certificate | None" = None,
        issued_at: datetime | None = None,
    ) -> "Certificate":
        """Mint a new verified certificate (ID will be 0 until persisted)."""
        certificate = cls(
            id=CertificateRecordId.generate(),
            certificate_id=certificate_id,
            learner=learner,
            course_id=course_id,
            course_title=course_title,
            language_tested=language_tested,
            proficiency_level=proficiency_level,
            final_score=final_score,
            completed_at=completed_at,
            issued_at=issued_at or datetime.now(UTC),
            certificate_url=certificate_url,
            supersedes_id=predecessor.id if predecessor else None,
        )
        certificate._record_event(
            CertificateIssued(
                certificate_id=certificate_id,
                learner_id=learner.learner_id.value,
                course_id=course_id.value,
                proficiency_level=proficiency_level,
                final_score=final_score,
                supersedes=predecessor.certificate_id if predecessor else None,
            )
        )
        return certificate

    @classmethod
    def create_with_id(
        cls,
        id: CertificateRecordId,
        certificate_id: str,
        learner: LearnerSnapshot,
        course_id: CourseId,
        course_title: str,
        language_tested: str,
        proficiency_level: str,
        final_score: int,
        completed_at: datetime,
        issued_at: datetime,
        certificate_url: str,
        verified: bool,
        is_current: bool,
        supersedes_id: CertificateRecordId | None = None,
        superseded_by: str | None = None,
        superseded_at: datetime | None = None,
    ) -> "Certificate":
        """Reconstitute a certificate from persistence."""
        return cls(
            id=id,
            certificate_id=certificate_id,
            learner=learner,
            course_id=course_id,
            course_title=course_title,
            language_tested=language_tested,
            proficiency_level=proficiency_level,
            final_score=final_score,
            completed_at=completed_at,
            issued_at=issued_at,
            certificate_url=certificate_url,
            verified=verified,
            is_current=is_current,
            supersedes_id=supersedes_id,
            superseded_by=superseded_by,
            superseded_at=superseded_at,
        )

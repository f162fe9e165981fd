"""Protocol for Certificate persistence."""

from typing import Protocol

from lingocert.domain.certification.entities import Certificate
from lingocert.domain.common.value_objects import CourseId, LearnerId


class CertificateRepositoryProtocol(Protocol):
    def find_by_certificate_id(self, certificate_id: str) -> Certificate | None:
        """Find a certificate by its public identifier."""
        ...

    def find_current(
        self, learner_id: LearnerId, course_id: CourseId, for_update: bool = False
    ) -> Certificate | None:
        """Find the head of the supersession chain for (learner, course)."""
        ...

    def list_for_learner(self, learner_id: LearnerId) -> list[Certificate]:
        """All certificates of a learner, newest issuance first."""
        ...

    def add(self, certificate: Certificate) -> Certificate:
        """
        Insert a new certificate.

        Raises:
            ConcurrentConflictError: If another current certificate already exists
                for the learner and course
        """
        ...

    def mark_superseded(self, certificate: Certificate) -> None:
        """Persist the superseded flags of a retired certificate."""
        ...

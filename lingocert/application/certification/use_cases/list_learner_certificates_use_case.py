"""Use case for listing a learner's certificates."""

from lingocert.application.certification.protocols import CertificateRepositoryProtocol
from lingocert.domain.certification.entities import Certificate
from lingocert.domain.common.value_objects import LearnerId


class ListLearnerCertificatesUseCase:
    def __init__(self, certificate_repository: CertificateRepositoryProtocol) -> None:
        self.certificate_repository = certificate_repository

    def list_certificates(self, learner_id: int) -> list[Certificate]:
        """All certificates of a learner, superseded ones included, newest first."""
        return self.certificate_repository.list_for_learner(LearnerId(learner_id))

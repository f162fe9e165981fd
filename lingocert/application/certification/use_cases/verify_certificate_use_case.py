"""Use case for public certificate verification."""

import structlog

from lingocert.application.certification.protocols import CertificateRepositoryProtocol
from lingocert.domain.certification.entities import Certificate
from lingocert.domain.certification.services import CertificateIdGenerator
from lingocert.exceptions import CertificateNotFoundError

logger = structlog.get_logger(__name__)


class VerifyCertificateUseCase:
    def __init__(
        self,
        certificate_repository: CertificateRepositoryProtocol,
        id_generator: CertificateIdGenerator,
    ) -> None:
        self.certificate_repository = certificate_repository
        self.id_generator = id_generator

    def verify(self, certificate_id: str) -> Certificate:
        """
        Look up a certificate by its public identifier.

        Malformed and unknown identifiers fail identically, so callers
        cannot tell which identifiers exist.

        Raises:
            CertificateNotFoundError: If no certificate matches
        """
        certificate = None
        if self.id_generator.is_well_formed(certificate_id):
            certificate = self.certificate_repository.find_by_certificate_id(certificate_id)
        if certificate is None:
            logger.info("certificate_verification_failed")
            raise CertificateNotFoundError()
        return certificate

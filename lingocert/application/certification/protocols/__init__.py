from .certificate_repository import CertificateRepositoryProtocol

__all__ = ["CertificateRepositoryProtocol"]

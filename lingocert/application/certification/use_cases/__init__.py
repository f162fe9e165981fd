from .issue_certificate_use_case import IssueCertificateUseCase
from .list_learner_certificates_use_case import ListLearnerCertificatesUseCase
from .verify_certificate_use_case import VerifyCertificateUseCase

__all__ = [
    "IssueCertificateUseCase",
    "ListLearnerCertificatesUseCase",
    "VerifyCertificateUseCase",
]

"""Certification API schemas."""

from .certificate_schemas import (
    CertificateSummary,
    CertificateVerificationResponse,
    IssueCertificateRequest,
    IssueCertificateResponse,
    LearnerCertificate,
    LearnerCertificatesResponse,
    to_certificate_summary,
    to_learner_certificate,
)

__all__ = [
    "CertificateSummary",
    "CertificateVerificationResponse",
    "IssueCertificateRequest",
    "IssueCertificateResponse",
    "LearnerCertificate",
    "LearnerCertificatesResponse",
    "to_certificate_summary",
    "to_learner_certificate",
]

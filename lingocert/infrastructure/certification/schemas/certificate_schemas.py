"""Pydantic schemas for certificate API request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field

from lingocert.domain.certification.entities import Certificate


class CertificateSummary(BaseModel):
    """
    Public view of a certificate.

    Carries only the learner snapshot printed on the certificate, never
    internal learner identifiers.
    """

    certificate_id: str
    learner_name: str
    learner_email: str
    course_title: str
    language_tested: str
    proficiency_level: str
    final_score: int = Field(..., ge=0, le=100)
    completed_at: datetime
    issued_at: datetime
    certificate_url: str
    verified: bool
    superseded_by: str | None = Field(
        None, description="Certificate that replaced this one, if superseded"
    )


class CertificateVerificationResponse(BaseModel):
    certificate: CertificateSummary


class LearnerCertificate(CertificateSummary):
    is_current: bool


class LearnerCertificatesResponse(BaseModel):
    certificates: list[LearnerCertificate]


class IssueCertificateRequest(BaseModel):
    learner_id: int = Field(..., ge=1)
    course_id: int = Field(..., ge=1)


class IssueCertificateResponse(BaseModel):
    success: bool = Field(..., description="Whether the request was processed")
    message: str = Field(..., description="Response message")
    certificate: CertificateSummary | None = Field(
        None, description="Current certificate, or null if the course is not completed"
    )


def to_certificate_summary(certificate: Certificate) -> CertificateSummary:
    return CertificateSummary(
        certificate_id=certificate.certificate_id,
        learner_name=certificate.learner.name,
        learner_email=certificate.learner.email,
        course_title=certificate.course_title,
        language_tested=certificate.language_tested,
        proficiency_level=certificate.proficiency_level,
        final_score=certificate.final_score,
        completed_at=certificate.completed_at,
        issued_at=certificate.issued_at,
        certificate_url=certificate.certificate_url,
        verified=certificate.verified,
        superseded_by=certificate.superseded_by,
    )


def to_learner_certificate(certificate: Certificate) -> LearnerCertificate:
    return LearnerCertificate(
        **to_certificate_summary(certificate).model_dump(),
        is_current=certificate.is_current,
    )

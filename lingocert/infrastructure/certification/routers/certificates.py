"""API routes for certificate verification and issuance."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from lingocert.application.certification.use_cases.issue_certificate_use_case import (
    IssueCertificateUseCase,
)
from lingocert.application.certification.use_cases.verify_certificate_use_case import (
    VerifyCertificateUseCase,
)
from lingocert.core import container
from lingocert.domain.common.exceptions import DomainError
from lingocert.exceptions import LingocertError
from lingocert.infrastructure.certification.schemas import (
    CertificateVerificationResponse,
    IssueCertificateRequest,
    IssueCertificateResponse,
    to_certificate_summary,
)
from lingocert.infrastructure.common.di import inject_use_case
from lingocert.infrastructure.common.rate_limiting import certificate_verify_limit, limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/certificates", tags=["certificates"])


@router.post("/issue", response_model=IssueCertificateResponse, status_code=status.HTTP_200_OK)
def issue_certificate(
    request: IssueCertificateRequest,
    use_case: IssueCertificateUseCase = Depends(
        inject_use_case(container.issue_certificate_use_case)
    ),
) -> IssueCertificateResponse:
    """
    Issue a certificate if the learner's stored standing shows the course completed.

    Repeating the call returns the existing certificate.
    """
    try:
        certificate = use_case.issue_if_eligible(
            learner_id=request.learner_id, course_id=request.course_id
        )
        return IssueCertificateResponse(
            success=True,
            message=(
                "Certificate is current" if certificate else "Course not completed; no certificate"
            ),
            certificate=to_certificate_summary(certificate) if certificate else None,
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to issue certificate for learner {request.learner_id} "
            f"on course {request.course_id}: {e!s}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{certificate_id}",
    response_model=CertificateVerificationResponse,
    status_code=status.HTTP_200_OK,
)
@limiter.limit(certificate_verify_limit)  # type: ignore[misc]
def verify_certificate(
    request: Request,
    certificate_id: str,
    use_case: VerifyCertificateUseCase = Depends(
        inject_use_case(container.verify_certificate_use_case)
    ),
) -> CertificateVerificationResponse:
    """
    Publicly verify a certificate.

    Malformed and unknown identifiers both return 404 "Certificate not found".
    Superseded certificates are returned with verified=false.
    """
    try:
        certificate = use_case.verify(certificate_id)
        return CertificateVerificationResponse(certificate=to_certificate_summary(certificate))
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to verify certificate: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

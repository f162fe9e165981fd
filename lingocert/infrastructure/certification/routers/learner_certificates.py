"""API routes for a learner's certificates."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from lingocert.application.certification.use_cases.list_learner_certificates_use_case import (
    ListLearnerCertificatesUseCase,
)
from lingocert.core import container
from lingocert.domain.common.exceptions import DomainError
from lingocert.exceptions import LingocertError
from lingocert.infrastructure.certification.schemas import (
    LearnerCertificatesResponse,
    to_learner_certificate,
)
from lingocert.infrastructure.common.di import inject_use_case

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/learners", tags=["certificates"])


@router.get(
    "/{learner_id}/certificates",
    response_model=LearnerCertificatesResponse,
    status_code=status.HTTP_200_OK,
)
def list_learner_certificates(
    learner_id: int,
    use_case: ListLearnerCertificatesUseCase = Depends(
        inject_use_case(container.list_learner_certificates_use_case)
    ),
) -> LearnerCertificatesResponse:
    """List all certificates of a learner, superseded ones included, newest first."""
    try:
        certificates = use_case.list_certificates(learner_id)
        return LearnerCertificatesResponse(
            certificates=[to_learner_certificate(c) for c in certificates]
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list certificates for learner {learner_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

"""API routes for a learner's attempt history."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lingocert.application.assessment.use_cases.attempt_history_use_case import (
    AttemptHistoryUseCase,
)
from lingocert.application.common.pagination import MAX_PAGE_SIZE
from lingocert.core import container
from lingocert.domain.common.exceptions import DomainError
from lingocert.exceptions import LingocertError
from lingocert.infrastructure.assessment.schemas import (
    AttemptSchema,
    AttemptStatisticsSchema,
    to_attempt_schema,
)
from lingocert.infrastructure.common.di import inject_use_case
from lingocert.infrastructure.common.schemas import PaginatedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/learners", tags=["attempts"])


@router.get(
    "/{learner_id}/attempts",
    response_model=PaginatedResponse[AttemptSchema],
    status_code=status.HTTP_200_OK,
)
def list_learner_attempts(
    learner_id: int,
    quiz_id: int | None = Query(None, ge=1, description="Only attempts on this quiz"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    use_case: AttemptHistoryUseCase = Depends(
        inject_use_case(container.attempt_history_use_case)
    ),
) -> PaginatedResponse[AttemptSchema]:
    """List a learner's attempts, newest first."""
    try:
        result = use_case.list_attempts(
            learner_id=learner_id, quiz_id=quiz_id, page=page, page_size=page_size
        )
        return PaginatedResponse[AttemptSchema](
            items=[to_attempt_schema(attempt) for attempt in result.items],
            total=result.total,
            page=result.pagination.page,
            page_size=result.pagination.page_size,
            total_pages=result.total_pages,
            has_next=result.has_next,
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list attempts for learner {learner_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{learner_id}/attempt-statistics",
    response_model=AttemptStatisticsSchema,
    status_code=status.HTTP_200_OK,
)
def get_attempt_statistics(
    learner_id: int,
    use_case: AttemptHistoryUseCase = Depends(
        inject_use_case(container.attempt_history_use_case)
    ),
) -> AttemptStatisticsSchema:
    """Summary figures over a learner's attempts."""
    try:
        stats = use_case.get_statistics(learner_id)
        return AttemptStatisticsSchema(
            total_attempts=stats.total_attempts,
            scored_attempts=stats.scored_attempts,
            passed_attempts=stats.passed_attempts,
            failed_attempts=stats.failed_attempts,
            average_score=stats.average_score,
            pass_rate=stats.pass_rate,
            quizzes_attempted=stats.quizzes_attempted,
            quizzes_passed=stats.quizzes_passed,
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to compute attempt statistics for learner {learner_id}: {e!s}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

"""API routes for course standings."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from lingocert.application.progress.use_cases.get_course_standing_use_case import (
    GetCourseStandingUseCase,
)
from lingocert.core import container
from lingocert.domain.common.exceptions import DomainError
from lingocert.exceptions import LingocertError
from lingocert.infrastructure.common.di import inject_use_case
from lingocert.infrastructure.progress.schemas import (
    CourseStandingResponse,
    to_course_standing_schema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/course-standings", tags=["progress"])


@router.get(
    "/{learner_id}/{course_id}",
    response_model=CourseStandingResponse,
    status_code=status.HTTP_200_OK,
)
def get_course_standing(
    learner_id: int,
    course_id: int,
    use_case: GetCourseStandingUseCase = Depends(
        inject_use_case(container.get_course_standing_use_case)
    ),
) -> CourseStandingResponse:
    """
    Get a learner's progress on a course.

    A learner without scored attempts gets a zero-valued standing.
    """
    try:
        standing = use_case.get_standing(learner_id=learner_id, course_id=course_id)
        return CourseStandingResponse(standing=to_course_standing_schema(standing))
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to get standing of learner {learner_id} on course {course_id}: {e!s}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e

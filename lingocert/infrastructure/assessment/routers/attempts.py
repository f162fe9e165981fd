"""API routes for the quiz attempt lifecycle."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from lingocert.application.assessment.use_cases.abandon_attempt_use_case import (
    AbandonAttemptUseCase,
)
from lingocert.application.assessment.use_cases.get_attempt_use_case import GetAttemptUseCase
from lingocert.application.assessment.use_cases.record_answer_use_case import (
    RecordAnswerUseCase,
)
from lingocert.application.assessment.use_cases.start_attempt_use_case import (
    StartAttemptUseCase,
)
from lingocert.application.assessment.use_cases.submit_attempt_use_case import (
    SubmitAttemptUseCase,
)
from lingocert.core import container
from lingocert.domain.common.exceptions import DomainError
from lingocert.exceptions import LingocertError
from lingocert.infrastructure.assessment.schemas import (
    AttemptResponse,
    RecordAnswerRequest,
    StartAttemptRequest,
    SubmitAttemptResponse,
    to_attempt_schema,
)
from lingocert.infrastructure.certification.schemas import to_certificate_summary
from lingocert.infrastructure.common.di import inject_use_case
from lingocert.infrastructure.progress.schemas import to_course_standing_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attempts", tags=["attempts"])


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to {action}: {e!s}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.post("", response_model=AttemptResponse, status_code=status.HTTP_201_CREATED)
def start_attempt(
    request: StartAttemptRequest,
    use_case: StartAttemptUseCase = Depends(inject_use_case(container.start_attempt_use_case)),
) -> AttemptResponse:
    """
    Start a quiz attempt.

    Returns 409 with the id of the attempt in flight when the learner
    already has an active attempt on the quiz.
    """
    try:
        attempt = use_case.start_attempt(learner_id=request.learner_id, quiz_id=request.quiz_id)
        return AttemptResponse(
            success=True,
            message="Attempt started successfully",
            attempt=to_attempt_schema(attempt),
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"start attempt on quiz {request.quiz_id}", e) from e


@router.get("/{attempt_id}", response_model=AttemptResponse, status_code=status.HTTP_200_OK)
def get_attempt(
    attempt_id: int,
    use_case: GetAttemptUseCase = Depends(inject_use_case(container.get_attempt_use_case)),
) -> AttemptResponse:
    """Get an attempt with its recorded answers."""
    try:
        attempt = use_case.get_attempt(attempt_id)
        return AttemptResponse(
            success=True,
            message="Attempt retrieved successfully",
            attempt=to_attempt_schema(attempt),
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"get attempt {attempt_id}", e) from e


@router.put(
    "/{attempt_id}/answer", response_model=AttemptResponse, status_code=status.HTTP_200_OK
)
def record_answer(
    attempt_id: int,
    request: RecordAnswerRequest,
    use_case: RecordAnswerUseCase = Depends(inject_use_case(container.record_answer_use_case)),
) -> AttemptResponse:
    """
    Record the answer to one question, replacing any earlier answer to it.

    Safe to retry: the last write for a question wins.
    """
    try:
        attempt = use_case.record_answer(
            attempt_id=attempt_id,
            question_id=request.question_id,
            selected_option_ids=request.selected_option_ids,
        )
        return AttemptResponse(
            success=True,
            message="Answer recorded successfully",
            attempt=to_attempt_schema(attempt),
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"record answer for attempt {attempt_id}", e) from e


@router.post(
    "/{attempt_id}/submit", response_model=SubmitAttemptResponse, status_code=status.HTTP_200_OK
)
def submit_attempt(
    attempt_id: int,
    use_case: SubmitAttemptUseCase = Depends(inject_use_case(container.submit_attempt_use_case)),
) -> SubmitAttemptResponse:
    """
    Submit an attempt for scoring.

    Idempotent: submitting a scored attempt returns the stored result.
    The response includes the refreshed course standing and the current
    certificate, if the course is completed.
    """
    try:
        outcome = use_case.submit(attempt_id)
        return SubmitAttemptResponse(
            success=True,
            message=(
                "Attempt scored successfully"
                if outcome.newly_scored
                else "Attempt was already scored"
            ),
            attempt=to_attempt_schema(outcome.attempt),
            course_standing=(
                to_course_standing_schema(outcome.standing) if outcome.standing else None
            ),
            certificate=(
                to_certificate_summary(outcome.certificate) if outcome.certificate else None
            ),
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"submit attempt {attempt_id}", e) from e


@router.post(
    "/{attempt_id}/abandon", response_model=AttemptResponse, status_code=status.HTTP_200_OK
)
def abandon_attempt(
    attempt_id: int,
    use_case: AbandonAttemptUseCase = Depends(
        inject_use_case(container.abandon_attempt_use_case)
    ),
) -> AttemptResponse:
    """Abandon an attempt. A finished attempt is returned unchanged."""
    try:
        attempt = use_case.abandon(attempt_id)
        return AttemptResponse(
            success=True,
            message=f"Attempt is {attempt.state.value}",
            attempt=to_attempt_schema(attempt),
        )
    except (LingocertError, DomainError):
        raise
    except Exception as e:
        raise _unexpected(f"abandon attempt {attempt_id}", e) from e

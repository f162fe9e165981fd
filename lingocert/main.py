"""FastAPI application for the lingocert assessment and certification service."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from lingocert.config import configure_logging, get_settings
from lingocert.database import dispose_engine, initialize_database
from lingocert.domain.assessment.exceptions import (
    AttemptAlreadyActiveError,
    IncompleteAttemptError,
    InvalidAttemptStateError,
    InvalidQuizDefinitionError,
    UnknownQuestionError,
)
from lingocert.domain.common.exceptions import (
    ConcurrentConflictError,
    DomainError,
    InvariantViolationError,
    ValidationError,
)
from lingocert.exceptions import LingocertError
from lingocert.infrastructure.assessment.routers import attempts, learner_attempts
from lingocert.infrastructure.certification.routers import certificates, learner_certificates
from lingocert.infrastructure.common.rate_limiting import limiter
from lingocert.infrastructure.progress.routers import course_standings

settings = get_settings()
logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins
DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (InvalidAttemptStateError, status.HTTP_409_CONFLICT),
    (AttemptAlreadyActiveError, status.HTTP_409_CONFLICT),
    (ConcurrentConflictError, status.HTTP_409_CONFLICT),
    (IncompleteAttemptError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (UnknownQuestionError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (InvalidQuizDefinitionError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InvariantViolationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)
    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENVIRONMENT} mode")
    yield
    dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def domain_error_status(exc: DomainError) -> int:
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = domain_error_status(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__, "context": exc.details},
    )


@app.exception_handler(LingocertError)
async def lingocert_error_handler(request: Request, exc: LingocertError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__, "context": {}},
    )


app.include_router(attempts.router, prefix=settings.API_V1_PREFIX)
app.include_router(learner_attempts.router, prefix=settings.API_V1_PREFIX)
app.include_router(course_standings.router, prefix=settings.API_V1_PREFIX)
app.include_router(certificates.router, prefix=settings.API_V1_PREFIX)
app.include_router(learner_certificates.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "healthy"}


@app.get(f"{settings.API_V1_PREFIX}/")
def api_root() -> dict[str, str]:
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }

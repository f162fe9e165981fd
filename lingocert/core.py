from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from lingocert.application.assessment.use_cases.abandon_attempt_use_case import (
    AbandonAttemptUseCase,
)
from lingocert.application.assessment.use_cases.attempt_history_use_case import (
    AttemptHistoryUseCase,
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
from lingocert.application.certification.use_cases.issue_certificate_use_case import (
    IssueCertificateUseCase,
)
from lingocert.application.certification.use_cases.list_learner_certificates_use_case import (
    ListLearnerCertificatesUseCase,
)
from lingocert.application.certification.use_cases.verify_certificate_use_case import (
    VerifyCertificateUseCase,
)
from lingocert.application.progress.use_cases.get_course_standing_use_case import (
    GetCourseStandingUseCase,
)
from lingocert.application.progress.use_cases.recompute_course_standing_use_case import (
    RecomputeCourseStandingUseCase,
)
from lingocert.config import get_settings
from lingocert.domain.assessment.services import AnswerEvaluator, QuizScorer
from lingocert.domain.certification.services import CertificateIdGenerator, IssuancePolicy
from lingocert.domain.progress.services import ProgressAggregator
from lingocert.domain.progress.value_objects import ProficiencyScale
from lingocert.infrastructure.assessment.repositories.attempt_repository import AttemptRepository
from lingocert.infrastructure.assessment.repositories.quiz_catalog_repository import (
    QuizCatalogRepository,
)
from lingocert.infrastructure.certification.repositories.certificate_repository import (
    CertificateRepository,
)
from lingocert.infrastructure.common.event_logging import log_domain_event
from lingocert.infrastructure.common.learner_directory import LearnerDirectory
from lingocert.infrastructure.common.unit_of_work import SqlAlchemyUnitOfWork
from lingocert.infrastructure.progress.repositories.course_standing_repository import (
    CourseStandingRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Each use case gets its own unit of work on the shared request session
    uow = providers.Factory(SqlAlchemyUnitOfWork, db=db, event_handlers=[log_domain_event])

    # Repositories
    attempt_repository = providers.Factory(AttemptRepository, db=db)
    quiz_catalog = providers.Factory(QuizCatalogRepository, db=db)
    course_standing_repository = providers.Factory(CourseStandingRepository, db=db)
    certificate_repository = providers.Factory(CertificateRepository, db=db)
    learner_directory = providers.Factory(LearnerDirectory, db=db)

    # Domain services (pure domain logic, no db)
    proficiency_scale = providers.Callable(
        ProficiencyScale.from_thresholds, settings.provided.PROFICIENCY_THRESHOLDS
    )
    answer_evaluator = providers.Factory(AnswerEvaluator)
    quiz_scorer = providers.Factory(QuizScorer)
    progress_aggregator = providers.Factory(ProgressAggregator, scale=proficiency_scale)
    issuance_policy = providers.Factory(IssuancePolicy, scale=proficiency_scale)
    certificate_id_generator = providers.Factory(
        CertificateIdGenerator, prefix=settings.provided.CERTIFICATE_ID_PREFIX
    )

    # Progress module use cases
    recompute_course_standing_use_case = providers.Factory(
        RecomputeCourseStandingUseCase,
        standing_repository=course_standing_repository,
        attempt_repository=attempt_repository,
        quiz_catalog=quiz_catalog,
        aggregator=progress_aggregator,
        uow=uow,
    )
    get_course_standing_use_case = providers.Factory(
        GetCourseStandingUseCase,
        standing_repository=course_standing_repository,
        attempt_repository=attempt_repository,
        quiz_catalog=quiz_catalog,
        aggregator=progress_aggregator,
    )

    # Certification module use cases
    issue_certificate_use_case = providers.Factory(
        IssueCertificateUseCase,
        certificate_repository=certificate_repository,
        standing_repository=course_standing_repository,
        quiz_catalog=quiz_catalog,
        learner_directory=learner_directory,
        id_generator=certificate_id_generator,
        policy=issuance_policy,
        certificate_base_url=settings.provided.CERTIFICATE_BASE_URL,
        uow=uow,
    )
    verify_certificate_use_case = providers.Factory(
        VerifyCertificateUseCase,
        certificate_repository=certificate_repository,
        id_generator=certificate_id_generator,
    )
    list_learner_certificates_use_case = providers.Factory(
        ListLearnerCertificatesUseCase,
        certificate_repository=certificate_repository,
    )

    # Assessment module use cases
    start_attempt_use_case = providers.Factory(
        StartAttemptUseCase,
        attempt_repository=attempt_repository,
        quiz_catalog=quiz_catalog,
        learner_directory=learner_directory,
        uow=uow,
    )
    record_answer_use_case = providers.Factory(
        RecordAnswerUseCase,
        attempt_repository=attempt_repository,
        quiz_catalog=quiz_catalog,
        evaluator=answer_evaluator,
        uow=uow,
    )
    submit_attempt_use_case = providers.Factory(
        SubmitAttemptUseCase,
        attempt_repository=attempt_repository,
        quiz_catalog=quiz_catalog,
        scorer=quiz_scorer,
        recompute_use_case=recompute_course_standing_use_case,
        issue_certificate_use_case=issue_certificate_use_case,
        uow=uow,
    )
    abandon_attempt_use_case = providers.Factory(
        AbandonAttemptUseCase,
        attempt_repository=attempt_repository,
        uow=uow,
    )
    get_attempt_use_case = providers.Factory(
        GetAttemptUseCase,
        attempt_repository=attempt_repository,
    )
    attempt_history_use_case = providers.Factory(
        AttemptHistoryUseCase,
        attempt_repository=attempt_repository,
    )


# Initialize container
container = Container()

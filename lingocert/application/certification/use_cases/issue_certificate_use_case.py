"""Use case for issuing (or superseding) a course certificate."""

import structlog

from lingocert.application.assessment.protocols import QuizCatalogProtocol
from lingocert.application.certification.protocols import CertificateRepositoryProtocol
from lingocert.application.common.protocols import LearnerDirectoryProtocol
from lingocert.application.common.unit_of_work import UnitOfWork
from lingocert.application.progress.protocols import CourseStandingRepositoryProtocol
from lingocert.domain.certification.entities import Certificate
from lingocert.domain.certification.services import (
    CertificateIdGenerator,
    IssuanceAction,
    IssuancePolicy,
)
from lingocert.domain.common.value_objects import CourseId, LearnerId
from lingocert.exceptions import CourseNotFoundError, LearnerNotFoundError

logger = structlog.get_logger(__name__)


class IssueCertificateUseCase:
    """
    Issues a certificate when a stored standing shows the course completed.

    Re-running with the same standing returns the existing certificate.
    A standing whose level ranks above the current certificate's replaces
    it; the old certificate stays readable but no longer verifies.
    """

    def __init__(
        self,
        certificate_repository: CertificateRepositoryProtocol,
        standing_repository: CourseStandingRepositoryProtocol,
        quiz_catalog: QuizCatalogProtocol,
        learner_directory: LearnerDirectoryProtocol,
        id_generator: CertificateIdGenerator,
        policy: IssuancePolicy,
        certificate_base_url: str,
        uow: UnitOfWork,
    ) -> None:
        self.certificate_repository = certificate_repository
        self.standing_repository = standing_repository
        self.quiz_catalog = quiz_catalog
        self.learner_directory = learner_directory
        self.id_generator = id_generator
        self.policy = policy
        self.certificate_base_url = certificate_base_url.rstrip("/")
        self.uow = uow

    def issue_if_eligible(self, learner_id: int, course_id: int) -> Certificate | None:
        """
        Issue or supersede a certificate according to the stored standing.

        Returns:
            The current certificate after the decision, None if there is none

        Raises:
            CourseNotFoundError: If the course does not exist
            LearnerNotFoundError: If the learner profile does not exist
            ConcurrentConflictError: If a concurrent issuance won the race
        """
        learner_id_vo = LearnerId(learner_id)
        course_id_vo = CourseId(course_id)

        with self.uow:
            standing = self.standing_repository.find(learner_id_vo, course_id_vo)
            current = self.certificate_repository.find_current(
                learner_id_vo, course_id_vo, for_update=True
            )
            if standing is None:
                return current

            decision = self.policy.decide(standing, current)
            if decision.action in (IssuanceAction.NONE, IssuanceAction.KEEP):
                logger.debug(
                    "certificate_not_issued",
                    learner_id=learner_id,
                    course_id=course_id,
                    reason=decision.reason,
                )
                return current

            course = self.quiz_catalog.get_course(course_id_vo)
            if course is None:
                raise CourseNotFoundError(course_id)
            learner = self.learner_directory.find_profile(learner_id_vo)
            if learner is None:
                raise LearnerNotFoundError(learner_id)

            certificate_id = self.id_generator.generate()
            predecessor = current if decision.action is IssuanceAction.SUPERSEDE else None
            certificate = Certificate.issue(
                certificate_id=certificate_id,
                learner=learner,
                course_id=course_id_vo,
                course_title=course.title,
                language_tested=course.language_name,
                proficiency_level=standing.proficiency_level,
                final_score=standing.overall_score,
                completed_at=standing.computed_at,
                certificate_url=f"{self.certificate_base_url}/{certificate_id}",
                predecessor=predecessor,
            )

            if predecessor is not None:
                predecessor.supersede_with(certificate)
                self.certificate_repository.mark_superseded(predecessor)
                self.uow.track(predecessor)

            saved = self.certificate_repository.add(certificate)
            self.uow.track(certificate)
            self.uow.commit()

        logger.info(
            "certificate_issued",
            certificate_id=saved.certificate_id,
            learner_id=learner_id,
            course_id=course_id,
            proficiency_level=saved.proficiency_level,
            reason=decision.reason,
        )
        return saved

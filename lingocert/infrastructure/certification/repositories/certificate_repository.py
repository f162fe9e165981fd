"""Repository for Certificate aggregates."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lingocert.domain.certification.entities import Certificate
from lingocert.domain.common.exceptions import ConcurrentConflictError
from lingocert.domain.common.value_objects import CourseId, LearnerId
from lingocert.infrastructure.certification.mappers.certificate_mapper import CertificateMapper
from lingocert.models import Certificate as CertificateORM


class CertificateRepository:
    """Repository for Certificate aggregates. Flushes, never commits."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CertificateMapper()

    def find_by_certificate_id(self, certificate_id: str) -> Certificate | None:
        stmt = select(CertificateORM).where(CertificateORM.certificate_id == certificate_id)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_current(
        self, learner_id: LearnerId, course_id: CourseId, for_update: bool = False
    ) -> Certificate | None:
        stmt = (
            select(CertificateORM)
            .where(
                CertificateORM.learner_id == learner_id.value,
                CertificateORM.course_id == course_id.value,
                CertificateORM.is_current.is_(True),
            )
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def list_for_learner(self, learner_id: LearnerId) -> list[Certificate]:
        stmt = (
            select(CertificateORM)
            .where(CertificateORM.learner_id == learner_id.value)
            .order_by(CertificateORM.issued_at.desc(), CertificateORM.id.desc())
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def add(self, certificate: Certificate) -> Certificate:
        """
        Insert a newly issued certificate.

        Raises:
            ConcurrentConflictError: If another current certificate exists for
                the learner and course, or the predecessor was already superseded
        """
        orm_model = self.mapper.to_orm(certificate)
        self.db.add(orm_model)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise ConcurrentConflictError(
                "certificate",
                {
                    "learner_id": certificate.learner_id.value,
                    "course_id": certificate.course_id.value,
                },
            ) from e
        return self.mapper.to_domain(orm_model)

    def mark_superseded(self, certificate: Certificate) -> None:
        orm_model = self.db.get(CertificateORM, certificate.id.value)
        if not orm_model:
            raise ValueError(f"Certificate {certificate.id.value} not found")
        orm_model.verified = certificate.verified
        orm_model.is_current = certificate.is_current
        orm_model.superseded_by = certificate.superseded_by
        orm_model.superseded_at = certificate.superseded_at
        self.db.flush()

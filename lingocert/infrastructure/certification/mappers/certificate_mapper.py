"""Mapper for Certificate ORM ↔ Domain conversion."""

from lingocert.domain.certification.entities import Certificate, LearnerSnapshot
from lingocert.domain.common.value_objects import CertificateRecordId, CourseId, LearnerId
from lingocert.models import Certificate as CertificateORM
from lingocert.utils import ensure_utc


class CertificateMapper:
    """Mapper for Certificate ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CertificateORM) -> Certificate:
        return Certificate.create_with_id(
            id=CertificateRecordId(orm_model.id),
            certificate_id=orm_model.certificate_id,
            learner=LearnerSnapshot(
                learner_id=LearnerId(orm_model.learner_id),
                name=orm_model.learner_name,
                email=orm_model.learner_email,
            ),
            course_id=CourseId(orm_model.course_id),
            course_title=orm_model.course_title,
            language_tested=orm_model.language_tested,
            proficiency_level=orm_model.proficiency_level,
            final_score=orm_model.final_score,
            completed_at=ensure_utc(orm_model.completed_at),
            issued_at=ensure_utc(orm_model.issued_at),
            certificate_url=orm_model.certificate_url,
            verified=orm_model.verified,
            is_current=orm_model.is_current,
            supersedes_id=(
                CertificateRecordId(orm_model.supersedes_id) if orm_model.supersedes_id else None
            ),
            superseded_by=orm_model.superseded_by,
            superseded_at=ensure_utc(orm_model.superseded_at) if orm_model.superseded_at else None,
        )

    def to_orm(self, domain_entity: Certificate) -> CertificateORM:
        """Convert a new certificate to an ORM model. Issued content is never updated."""
        return CertificateORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            certificate_id=domain_entity.certificate_id,
            learner_id=domain_entity.learner_id.value,
            course_id=domain_entity.course_id.value,
            learner_name=domain_entity.learner.name,
            learner_email=domain_entity.learner.email,
            course_title=domain_entity.course_title,
            language_tested=domain_entity.language_tested,
            proficiency_level=domain_entity.proficiency_level,
            final_score=domain_entity.final_score,
            completed_at=domain_entity.completed_at,
            issued_at=domain_entity.issued_at,
            certificate_url=domain_entity.certificate_url,
            verified=domain_entity.verified,
            is_current=domain_entity.is_current,
            supersedes_id=(
                domain_entity.supersedes_id.value if domain_entity.supersedes_id else None
            ),
            superseded_by=domain_entity.superseded_by,
            superseded_at=domain_entity.superseded_at,
        )

"""Read-only repository materializing quiz and course content."""

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from lingocert.domain.assessment.value_objects import CourseDefinition, QuizDefinition
from lingocert.domain.common.value_objects import CourseId, QuizId
from lingocert.infrastructure.assessment.mappers.quiz_definition_mapper import (
    QuizDefinitionMapper,
)
from lingocert.models import Course as CourseORM
from lingocert.models import Lesson as LessonORM
from lingocert.models import Question as QuestionORM
from lingocert.models import Quiz as QuizORM


class QuizCatalogRepository:
    """Loads the full content graph eagerly, once per call."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = QuizDefinitionMapper()

    def get_quiz(self, quiz_id: QuizId) -> QuizDefinition | None:
        stmt = (
            select(QuizORM)
            .where(QuizORM.id == quiz_id.value)
            .options(
                joinedload(QuizORM.lesson),
                selectinload(QuizORM.questions).selectinload(QuestionORM.options),
            )
        )
        orm_model = self.db.execute(stmt).unique().scalar_one_or_none()
        return self.mapper.quiz_to_domain(orm_model) if orm_model else None

    def get_course(self, course_id: CourseId) -> CourseDefinition | None:
        stmt = (
            select(CourseORM)
            .where(CourseORM.id == course_id.value)
            .options(
                joinedload(CourseORM.language),
                selectinload(CourseORM.lessons)
                .selectinload(LessonORM.quizzes)
                .selectinload(QuizORM.questions)
                .selectinload(QuestionORM.options),
            )
        )
        orm_model = self.db.execute(stmt).unique().scalar_one_or_none()
        return self.mapper.course_to_domain(orm_model) if orm_model else None

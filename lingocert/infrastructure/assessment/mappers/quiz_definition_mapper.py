"""Mapper from course content ORM graphs to frozen definitions."""

from lingocert.domain.assessment.value_objects import (
    CourseDefinition,
    LessonDefinition,
    OptionSnapshot,
    QuestionSnapshot,
    QuizDefinition,
    SelectionMode,
)
from lingocert.domain.common.value_objects import (
    CourseId,
    LessonId,
    OptionId,
    QuestionId,
    QuizId,
)
from lingocert.models import Course as CourseORM
from lingocert.models import Question as QuestionORM
from lingocert.models import Quiz as QuizORM


class QuizDefinitionMapper:
    """Builds content snapshots. Content is read-only, so there is no to_orm."""

    def quiz_to_domain(self, orm_model: QuizORM) -> QuizDefinition:
        return QuizDefinition(
            id=QuizId(orm_model.id),
            title=orm_model.title,
            lesson_id=LessonId(orm_model.lesson_id),
            course_id=CourseId(orm_model.lesson.course_id),
            min_passing_score=orm_model.min_passing_score,
            questions=tuple(self._question_to_domain(q) for q in orm_model.questions),
        )

    def course_to_domain(self, orm_model: CourseORM) -> CourseDefinition:
        return CourseDefinition(
            id=CourseId(orm_model.id),
            title=orm_model.title,
            language_name=orm_model.language.name,
            lessons=tuple(
                LessonDefinition(
                    id=LessonId(lesson.id),
                    title=lesson.title,
                    order_index=lesson.order_index,
                    is_required=lesson.is_required,
                    quizzes=tuple(self.quiz_to_domain(quiz) for quiz in lesson.quizzes),
                )
                for lesson in orm_model.lessons
            ),
        )

    @staticmethod
    def _question_to_domain(orm_model: QuestionORM) -> QuestionSnapshot:
        return QuestionSnapshot(
            id=QuestionId(orm_model.id),
            prompt=orm_model.prompt,
            options=tuple(
                OptionSnapshot(
                    id=OptionId(option.id),
                    text=option.text,
                    is_correct=option.is_correct,
                    media_url=option.media_url,
                )
                for option in orm_model.options
            ),
            selection_mode=SelectionMode(orm_model.selection_mode),
            points=orm_model.points,
            media_url=orm_model.media_url,
        )

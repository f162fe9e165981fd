"""Database models."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lingocert.database import Base

ACTIVE_ATTEMPT_CONDITION = "state IN ('started', 'in_progress')"
CURRENT_CERTIFICATE_CONDITION = "is_current"


# --- Course content (authored and owned by the catalog service, read-only here) ---


class Language(Base):
    """Language a course teaches."""

    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)

    courses: Mapped[list["Course"]] = relationship(back_populates="language")

    def __repr__(self) -> str:
        """String representation of Language."""
        return f"<Language(id={self.id}, code='{self.code}')>"


class User(Base):
    """Learner account; only the fields certificates snapshot are mapped."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email='{self.email}')>"


class Course(Base):
    """Course of lessons in one language."""

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    language_id: Mapped[int] = mapped_column(
        ForeignKey("languages.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    language: Mapped[Language] = relationship(back_populates="courses")
    lessons: Mapped[list["Lesson"]] = relationship(
        back_populates="course", order_by="Lesson.order_index"
    )

    def __repr__(self) -> str:
        """String representation of Course."""
        return f"<Course(id={self.id}, title='{self.title}')>"


class Lesson(Base):
    """Lesson within a course; required lessons gate course completion."""

    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    course: Mapped[Course] = relationship(back_populates="lessons")
    quizzes: Mapped[list["Quiz"]] = relationship(back_populates="lesson", order_by="Quiz.id")


class Quiz(Base):
    """Quiz attached to a lesson."""

    __tablename__ = "quizzes"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    lesson_id: Mapped[int] = mapped_column(
        ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    min_passing_score: Mapped[int] = mapped_column(Integer, default=70, nullable=False)

    lesson: Mapped[Lesson] = relationship(back_populates="quizzes")
    questions: Mapped[list["Question"]] = relationship(
        back_populates="quiz", order_by="[Question.position, Question.id]"
    )


class Question(Base):
    """Question of a quiz."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    quiz_id: Mapped[int] = mapped_column(
        ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    media_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    selection_mode: Mapped[str] = mapped_column(String(20), default="single", nullable=False)
    points: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    quiz: Mapped[Quiz] = relationship(back_populates="questions")
    options: Mapped[list["Option"]] = relationship(
        back_populates="question", order_by="[Option.position, Option.id]"
    )


class Option(Base):
    """Answer option of a question."""

    __tablename__ = "options"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    media_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    is_correct: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    question: Mapped[Question] = relationship(back_populates="options")


# --- Assessment records (owned by this service) ---


class QuizAttempt(Base):
    """One learner's attempt at a quiz."""

    __tablename__ = "quiz_attempts"
    __table_args__ = (
        # At most one attempt in flight per (learner, quiz)
        Index(
            "uq_quiz_attempts_active_learner_quiz",
            "learner_id",
            "quiz_id",
            unique=True,
            postgresql_where=text(ACTIVE_ATTEMPT_CONDITION),
            sqlite_where=text(ACTIVE_ATTEMPT_CONDITION),
        ),
        Index("ix_quiz_attempts_learner_quiz", "learner_id", "quiz_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    learner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    quiz_id: Mapped[int] = mapped_column(
        ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False
    )
    state: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    scored_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    abandoned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Score result, set once at the submit commit point
    correct_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_questions: Mapped[int | None] = mapped_column(Integer, nullable=True)
    percent_correct: Mapped[int | None] = mapped_column(Integer, nullable=True)
    min_passing_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    passed: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    answers: Mapped[list["AttemptAnswer"]] = relationship(
        back_populates="attempt", order_by="AttemptAnswer.answered_at"
    )

    def __repr__(self) -> str:
        """String representation of QuizAttempt."""
        return f"<QuizAttempt(id={self.id}, quiz_id={self.quiz_id}, state='{self.state}')>"


class AttemptAnswer(Base):
    """Answer to one question within an attempt, with its frozen verdict."""

    __tablename__ = "attempt_answers"
    __table_args__ = (
        UniqueConstraint("attempt_id", "question_id", name="uq_attempt_answers_attempt_question"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    attempt_id: Mapped[int] = mapped_column(
        ForeignKey("quiz_attempts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="RESTRICT"), nullable=False
    )
    selected_option_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    correct_option_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    answered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    attempt: Mapped[QuizAttempt] = relationship(back_populates="answers")


class CourseStanding(Base):
    """Recomputed progress of a learner on a course."""

    __tablename__ = "course_standings"
    __table_args__ = (
        UniqueConstraint("learner_id", "course_id", name="uq_course_standings_learner_course"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    learner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quiz_standings: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    completion_percent: Mapped[int] = mapped_column(Integer, nullable=False)
    overall_score: Mapped[int] = mapped_column(Integer, nullable=False)
    proficiency_level: Mapped[str] = mapped_column(String(50), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False)
    computed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Certificate(Base):
    """Issued certificate; superseded rows are kept with verified=False."""

    __tablename__ = "certificates"
    __table_args__ = (
        # Head of the supersession chain is unique per (learner, course)
        Index(
            "uq_certificates_current_learner_course",
            "learner_id",
            "course_id",
            unique=True,
            postgresql_where=text(CURRENT_CERTIFICATE_CONDITION),
            sqlite_where=text(CURRENT_CERTIFICATE_CONDITION),
        ),
        Index("ix_certificates_learner_course", "learner_id", "course_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    certificate_id: Mapped[str] = mapped_column(String(40), nullable=False, unique=True)
    learner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="RESTRICT"), nullable=False
    )
    learner_name: Mapped[str] = mapped_column(String(200), nullable=False)
    learner_email: Mapped[str] = mapped_column(String(320), nullable=False)
    course_title: Mapped[str] = mapped_column(String(300), nullable=False)
    language_tested: Mapped[str] = mapped_column(String(100), nullable=False)
    proficiency_level: Mapped[str] = mapped_column(String(50), nullable=False)
    final_score: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    certificate_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False)
    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False)
    # A certificate can be superseded at most once, so the chain never forks
    supersedes_id: Mapped[int | None] = mapped_column(
        ForeignKey("certificates.id", ondelete="RESTRICT"), nullable=True, unique=True
    )
    superseded_by: Mapped[str | None] = mapped_column(String(40), nullable=True)
    superseded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        """String representation of Certificate."""
        return f"<Certificate(id={self.id}, certificate_id='{self.certificate_id}')>"

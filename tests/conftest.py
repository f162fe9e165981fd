"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import Callable, Generator  # noqa: E402
from dataclasses import dataclass  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from lingocert import models  # noqa: E402
from lingocert.database import Base, get_db  # noqa: E402
from lingocert.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# One shared connection, so request threads see the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@dataclass
class SeededQuiz:
    """A quiz plus the option ids needed to answer it right or wrong."""

    quiz: models.Quiz
    question_ids: list[int]
    correct_option_ids: list[int]
    wrong_option_ids: list[int]

    @property
    def id(self) -> int:
        return self.quiz.id


@dataclass
class SeededCourse:
    course: models.Course
    required: list[SeededQuiz]
    optional: list[SeededQuiz]

    @property
    def id(self) -> int:
        return self.course.id


def seed_quiz(
    db: Session,
    lesson: models.Lesson,
    question_count: int,
    min_passing_score: int,
    title: str = "Quiz",
) -> SeededQuiz:
    """Create a quiz of single-select questions, each with one right and one wrong option."""
    quiz = models.Quiz(lesson_id=lesson.id, title=title, min_passing_score=min_passing_score)
    db.add(quiz)
    db.flush()

    question_ids: list[int] = []
    correct: list[int] = []
    wrong: list[int] = []
    for position in range(question_count):
        question = models.Question(
            quiz_id=quiz.id, prompt=f"Question {position + 1}", position=position
        )
        db.add(question)
        db.flush()
        right = models.Option(question_id=question.id, text="right", is_correct=True, position=0)
        other = models.Option(question_id=question.id, text="wrong", is_correct=False, position=1)
        db.add_all([right, other])
        db.flush()
        question_ids.append(question.id)
        correct.append(right.id)
        wrong.append(other.id)

    return SeededQuiz(
        quiz=quiz, question_ids=question_ids, correct_option_ids=correct, wrong_option_ids=wrong
    )


def seed_course(
    db: Session,
    required_quizzes: list[tuple[int, int]],
    optional_quizzes: list[tuple[int, int]] | None = None,
    title: str = "Spanish for Travellers",
    language: tuple[str, str] = ("Spanish", "es"),
) -> SeededCourse:
    """
    Create a course with one lesson per quiz.

    Each quiz is given as (question_count, min_passing_score).
    """
    language_row = db.query(models.Language).filter_by(code=language[1]).first()
    if language_row is None:
        language_row = models.Language(name=language[0], code=language[1])
        db.add(language_row)
        db.flush()

    course = models.Course(title=title, language_id=language_row.id)
    db.add(course)
    db.flush()

    def add_lessons(
        specs: list[tuple[int, int]], is_required: bool, offset: int
    ) -> list[SeededQuiz]:
        seeded = []
        for index, (question_count, min_passing_score) in enumerate(specs):
            lesson = models.Lesson(
                course_id=course.id,
                title=f"Lesson {offset + index + 1}",
                order_index=offset + index,
                is_required=is_required,
            )
            db.add(lesson)
            db.flush()
            seeded.append(
                seed_quiz(
                    db,
                    lesson,
                    question_count,
                    min_passing_score,
                    title=f"Quiz {offset + index + 1}",
                )
            )
        return seeded

    required = add_lessons(required_quizzes, True, 0)
    optional = add_lessons(optional_quizzes or [], False, len(required_quizzes))
    db.commit()
    return SeededCourse(course=course, required=required, optional=optional)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_learner(db_session: Session) -> models.User:
    """Create a learner."""
    learner = models.User(name="Ana García", email="ana@example.com")
    db_session.add(learner)
    db_session.commit()
    db_session.refresh(learner)
    return learner


@pytest.fixture
def other_learner(db_session: Session) -> models.User:
    learner = models.User(name="Ben Okafor", email="ben@example.com")
    db_session.add(learner)
    db_session.commit()
    db_session.refresh(learner)
    return learner


@pytest.fixture
def test_course(db_session: Session) -> SeededCourse:
    """Two required 10-question quizzes (pass at 60) and one optional 2-question quiz."""
    return seed_course(
        db_session, required_quizzes=[(10, 60), (10, 60)], optional_quizzes=[(2, 50)]
    )


@pytest.fixture
def short_quiz(db_session: Session) -> SeededQuiz:
    """A single required 4-question quiz passing at 75."""
    course = seed_course(
        db_session, required_quizzes=[(4, 75)], title="French Basics", language=("French", "fr")
    )
    return course.required[0]


@pytest.fixture
def take_quiz(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Start, answer and submit an attempt; returns the submit response body."""

    def _take_quiz(learner_id: int, quiz: SeededQuiz, correct_count: int) -> dict[str, Any]:
        response = client.post(
            "/api/v1/attempts", json={"learner_id": learner_id, "quiz_id": quiz.id}
        )
        assert response.status_code == 201, response.text
        attempt_id = response.json()["attempt"]["id"]

        for index, question_id in enumerate(quiz.question_ids):
            option_id = (
                quiz.correct_option_ids[index]
                if index < correct_count
                else quiz.wrong_option_ids[index]
            )
            response = client.put(
                f"/api/v1/attempts/{attempt_id}/answer",
                json={"question_id": question_id, "selected_option_ids": [option_id]},
            )
            assert response.status_code == 200, response.text

        response = client.post(f"/api/v1/attempts/{attempt_id}/submit")
        assert response.status_code == 200, response.text
        return response.json()

    return _take_quiz

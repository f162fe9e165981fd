"""Tests for the quiz attempt lifecycle API endpoints."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from lingocert import models
from lingocert.infrastructure.assessment.repositories.attempt_repository import (
    AttemptRepository,
)
from tests.conftest import SeededCourse, SeededQuiz, seed_course


def start(client: TestClient, learner_id: int, quiz_id: int) -> Any:
    return client.post("/api/v1/attempts", json={"learner_id": learner_id, "quiz_id": quiz_id})


def answer(client: TestClient, attempt_id: int, question_id: int, option_ids: list[int]) -> Any:
    return client.put(
        f"/api/v1/attempts/{attempt_id}/answer",
        json={"question_id": question_id, "selected_option_ids": option_ids},
    )


def answer_all(client: TestClient, attempt_id: int, quiz: SeededQuiz) -> None:
    for question_id, option_id in zip(quiz.question_ids, quiz.correct_option_ids, strict=True):
        assert answer(client, attempt_id, question_id, [option_id]).status_code == 200


class TestStartAttempt:
    """Test POST /api/v1/attempts."""

    def test_start_attempt_success(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        response = start(client, test_learner.id, short_quiz.id)

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        attempt = data["attempt"]
        assert attempt["state"] == "started"
        assert attempt["learner_id"] == test_learner.id
        assert attempt["quiz_id"] == short_quiz.id
        assert attempt["answers"] == []
        assert attempt["result"] is None
        assert attempt["submitted_at"] is None

    def test_second_start_conflicts_with_active_attempt(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        first = start(client, test_learner.id, short_quiz.id).json()["attempt"]

        response = start(client, test_learner.id, short_quiz.id)

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "AttemptAlreadyActiveError"
        assert data["context"]["active_attempt_id"] == first["id"]

    def test_other_learner_can_start_same_quiz(
        self,
        client: TestClient,
        test_learner: models.User,
        other_learner: models.User,
        short_quiz: SeededQuiz,
    ) -> None:
        assert start(client, test_learner.id, short_quiz.id).status_code == 201
        assert start(client, other_learner.id, short_quiz.id).status_code == 201

    def test_start_allowed_after_abandon(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        first = start(client, test_learner.id, short_quiz.id).json()["attempt"]
        client.post(f"/api/v1/attempts/{first['id']}/abandon")

        response = start(client, test_learner.id, short_quiz.id)

        assert response.status_code == 201
        assert response.json()["attempt"]["id"] != first["id"]

    def test_start_unknown_quiz_returns_404(
        self, client: TestClient, test_learner: models.User
    ) -> None:
        response = start(client, test_learner.id, 9999)

        assert response.status_code == 404
        assert response.json()["detail"] == "Quiz with id 9999 not found"

    def test_start_unknown_learner_returns_404(
        self, client: TestClient, short_quiz: SeededQuiz
    ) -> None:
        response = start(client, 9999, short_quiz.id)

        assert response.status_code == 404
        assert response.json()["detail"] == "Learner with id 9999 not found"

    def test_start_quiz_without_questions_is_server_error(
        self, client: TestClient, db_session: Session, test_learner: models.User
    ) -> None:
        course = seed_course(db_session, required_quizzes=[(0, 50)], title="Empty")

        response = start(client, test_learner.id, course.required[0].id)

        assert response.status_code == 500
        assert response.json()["error"] == "InvalidQuizDefinitionError"

    def test_concurrent_start_loser_gets_conflict(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        winner = start(client, test_learner.id, short_quiz.id).json()["attempt"]

        # The loser's pre-check misses the winner's row, so the insert hits the unique index
        original_find_active = AttemptRepository.find_active
        calls = {"count": 0}

        def stale_find_active(self: AttemptRepository, learner_id: Any, quiz_id: Any) -> Any:
            calls["count"] += 1
            if calls["count"] == 1:
                return None
            return original_find_active(self, learner_id, quiz_id)

        monkeypatch.setattr(AttemptRepository, "find_active", stale_find_active)

        response = start(client, test_learner.id, short_quiz.id)

        assert response.status_code == 409
        assert response.json()["context"]["active_attempt_id"] == winner["id"]
        assert calls["count"] == 2


class TestRecordAnswer:
    """Test PUT /api/v1/attempts/{attempt_id}/answer."""

    def test_first_answer_moves_attempt_in_progress(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]

        response = answer(
            client, attempt_id, short_quiz.question_ids[0], [short_quiz.correct_option_ids[0]]
        )

        assert response.status_code == 200
        attempt = response.json()["attempt"]
        assert attempt["state"] == "in_progress"
        assert len(attempt["answers"]) == 1
        recorded = attempt["answers"][0]
        assert recorded["selected_option_ids"] == [short_quiz.correct_option_ids[0]]
        # Verdicts stay hidden until the attempt is scored
        assert recorded["is_correct"] is None
        assert recorded["correct_option_ids"] is None

    def test_answering_again_replaces_previous_answer(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]
        question_id = short_quiz.question_ids[0]
        answer(client, attempt_id, question_id, [short_quiz.wrong_option_ids[0]])

        response = answer(client, attempt_id, question_id, [short_quiz.correct_option_ids[0]])

        answers = response.json()["attempt"]["answers"]
        assert len(answers) == 1
        assert answers[0]["selected_option_ids"] == [short_quiz.correct_option_ids[0]]

    def test_empty_selection_is_recorded(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]

        response = answer(client, attempt_id, short_quiz.question_ids[0], [])

        assert response.status_code == 200
        assert response.json()["attempt"]["answers"][0]["selected_option_ids"] == []

    def test_question_from_other_quiz_returns_422(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        test_course: SeededCourse,
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]
        foreign_question = test_course.required[0].question_ids[0]

        response = answer(client, attempt_id, foreign_question, [])

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "UnknownQuestionError"
        assert data["context"]["question_id"] == foreign_question

    def test_option_from_other_question_returns_422(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]

        response = answer(
            client, attempt_id, short_quiz.question_ids[0], [short_quiz.correct_option_ids[1]]
        )

        assert response.status_code == 422
        assert response.json()["error"] == "UnknownOptionError"

    def test_unknown_attempt_returns_404(
        self, client: TestClient, short_quiz: SeededQuiz
    ) -> None:
        response = answer(client, 9999, short_quiz.question_ids[0], [])

        assert response.status_code == 404

    def test_answer_after_submit_conflicts(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> None:
        attempt_id = take_quiz(test_learner.id, short_quiz, 4)["attempt"]["id"]

        response = answer(
            client, attempt_id, short_quiz.question_ids[0], [short_quiz.wrong_option_ids[0]]
        )

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "InvalidAttemptStateError"
        assert data["context"]["actual_state"] == "scored"


class TestSubmitAttempt:
    """Test POST /api/v1/attempts/{attempt_id}/submit."""

    def test_submit_scores_attempt(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> None:
        data = take_quiz(test_learner.id, short_quiz, 3)

        assert data["message"] == "Attempt scored successfully"
        attempt = data["attempt"]
        assert attempt["state"] == "scored"
        assert attempt["result"] == {
            "correct_count": 3,
            "total_questions": 4,
            "percent_correct": 75,
            "min_passing_score": 75,
            "passed": True,
        }
        assert attempt["scored_at"] is not None
        verdicts = [a["is_correct"] for a in attempt["answers"]]
        assert verdicts == [True, True, True, False]
        assert attempt["answers"][3]["correct_option_ids"] == [short_quiz.correct_option_ids[3]]

    def test_submit_below_threshold_fails(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> None:
        result = take_quiz(test_learner.id, short_quiz, 2)["attempt"]["result"]

        assert result["percent_correct"] == 50
        assert result["passed"] is False

    def test_submit_includes_course_standing(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> None:
        data = take_quiz(test_learner.id, short_quiz, 2)

        standing = data["course_standing"]
        assert standing["learner_id"] == test_learner.id
        assert standing["completion_percent"] == 0
        assert data["certificate"] is None

    def test_submit_twice_returns_stored_result(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> None:
        first = take_quiz(test_learner.id, short_quiz, 4)
        attempt_id = first["attempt"]["id"]

        response = client.post(f"/api/v1/attempts/{attempt_id}/submit")

        assert response.status_code == 200
        second = response.json()
        assert second["message"] == "Attempt was already scored"
        assert second["attempt"]["result"] == first["attempt"]["result"]
        assert second["attempt"]["scored_at"] == first["attempt"]["scored_at"]
        assert second["certificate"]["certificate_id"] == first["certificate"]["certificate_id"]

    def test_concurrent_submit_loser_returns_stored_result(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]
        answer_all(client, attempt_id, short_quiz)

        original_mark_scored = AttemptRepository.mark_scored
        calls = {"count": 0}

        def scored_elsewhere(self: AttemptRepository, attempt: Any) -> bool:
            # Another request scores and commits between the read and the update
            calls["count"] += 1
            original_mark_scored(self, attempt)
            self.db.commit()
            return False

        monkeypatch.setattr(AttemptRepository, "mark_scored", scored_elsewhere)

        response = client.post(f"/api/v1/attempts/{attempt_id}/submit")

        assert response.status_code == 200
        data = response.json()
        assert calls["count"] == 1
        assert data["message"] == "Attempt was already scored"
        assert data["attempt"]["state"] == "scored"
        assert data["attempt"]["result"]["correct_count"] == 4
        assert data["attempt"]["scored_at"] is not None
        assert data["certificate"] is not None

        stored = client.get(f"/api/v1/attempts/{attempt_id}").json()["attempt"]
        assert stored["result"] == data["attempt"]["result"]

    def test_submit_with_unanswered_questions_returns_422(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]
        answer(client, attempt_id, short_quiz.question_ids[0], [short_quiz.correct_option_ids[0]])

        response = client.post(f"/api/v1/attempts/{attempt_id}/submit")

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "IncompleteAttemptError"
        assert data["context"]["missing_question_ids"] == sorted(short_quiz.question_ids[1:])

        # The attempt stays open for more answers
        attempt = client.get(f"/api/v1/attempts/{attempt_id}").json()["attempt"]
        assert attempt["state"] == "in_progress"

    def test_submit_abandoned_attempt_conflicts(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]
        answer_all(client, attempt_id, short_quiz)
        client.post(f"/api/v1/attempts/{attempt_id}/abandon")

        response = client.post(f"/api/v1/attempts/{attempt_id}/submit")

        assert response.status_code == 409

    def test_submit_unknown_attempt_returns_404(self, client: TestClient) -> None:
        response = client.post("/api/v1/attempts/9999/submit")

        assert response.status_code == 404
        assert response.json()["detail"] == "Attempt with id 9999 not found"


class TestAbandonAttempt:
    """Test POST /api/v1/attempts/{attempt_id}/abandon."""

    def test_abandon_active_attempt(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]

        response = client.post(f"/api/v1/attempts/{attempt_id}/abandon")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Attempt is abandoned"
        assert data["attempt"]["state"] == "abandoned"
        assert data["attempt"]["abandoned_at"] is not None

    def test_abandon_twice_is_a_no_op(
        self, client: TestClient, test_learner: models.User, short_quiz: SeededQuiz
    ) -> None:
        attempt_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]
        first = client.post(f"/api/v1/attempts/{attempt_id}/abandon").json()["attempt"]

        second = client.post(f"/api/v1/attempts/{attempt_id}/abandon").json()["attempt"]

        assert second["abandoned_at"] == first["abandoned_at"]

    def test_abandon_scored_attempt_keeps_it_scored(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> None:
        attempt_id = take_quiz(test_learner.id, short_quiz, 4)["attempt"]["id"]

        response = client.post(f"/api/v1/attempts/{attempt_id}/abandon")

        assert response.status_code == 200
        assert response.json()["message"] == "Attempt is scored"
        assert response.json()["attempt"]["result"]["passed"] is True


class TestAttemptHistory:
    """Test the learner attempt history and statistics endpoints."""

    @pytest.fixture
    def three_attempts(
        self,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> list[dict[str, Any]]:
        return [take_quiz(test_learner.id, short_quiz, count) for count in (2, 3, 4)]

    def test_list_attempts_newest_first(
        self,
        client: TestClient,
        test_learner: models.User,
        three_attempts: list[dict[str, Any]],
    ) -> None:
        response = client.get(f"/api/v1/learners/{test_learner.id}/attempts")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["has_next"] is False
        ids = [item["id"] for item in data["items"]]
        assert ids == [a["attempt"]["id"] for a in reversed(three_attempts)]

    def test_list_attempts_paginates(
        self,
        client: TestClient,
        test_learner: models.User,
        three_attempts: list[dict[str, Any]],
    ) -> None:
        response = client.get(
            f"/api/v1/learners/{test_learner.id}/attempts", params={"page": 2, "page_size": 2}
        )

        data = response.json()
        assert data["page"] == 2
        assert data["page_size"] == 2
        assert data["total_pages"] == 2
        assert data["has_next"] is False
        assert [item["id"] for item in data["items"]] == [three_attempts[0]["attempt"]["id"]]

    def test_list_attempts_filters_by_quiz(
        self,
        client: TestClient,
        test_learner: models.User,
        test_course: SeededCourse,
        three_attempts: list[dict[str, Any]],
    ) -> None:
        response = client.get(
            f"/api/v1/learners/{test_learner.id}/attempts",
            params={"quiz_id": test_course.required[0].id},
        )

        assert response.json()["total"] == 0

    def test_page_size_above_maximum_is_rejected(
        self, client: TestClient, test_learner: models.User
    ) -> None:
        response = client.get(
            f"/api/v1/learners/{test_learner.id}/attempts", params={"page_size": 101}
        )

        assert response.status_code == 422

    def test_attempt_statistics(
        self,
        client: TestClient,
        test_learner: models.User,
        three_attempts: list[dict[str, Any]],
    ) -> None:
        response = client.get(f"/api/v1/learners/{test_learner.id}/attempt-statistics")

        assert response.status_code == 200
        assert response.json() == {
            "total_attempts": 3,
            "scored_attempts": 3,
            "passed_attempts": 2,
            "failed_attempts": 1,
            "average_score": 75.0,
            "pass_rate": 66.67,
            "quizzes_attempted": 1,
            "quizzes_passed": 1,
        }

    def test_statistics_without_attempts(
        self, client: TestClient, test_learner: models.User
    ) -> None:
        data = client.get(f"/api/v1/learners/{test_learner.id}/attempt-statistics").json()

        assert data["total_attempts"] == 0
        assert data["scored_attempts"] == 0
        assert data["average_score"] == 0.0
        assert data["pass_rate"] == 0.0

    def test_statistics_count_unscored_attempts(
        self,
        client: TestClient,
        test_learner: models.User,
        short_quiz: SeededQuiz,
        take_quiz: Callable[..., dict[str, Any]],
    ) -> None:
        abandoned_id = start(client, test_learner.id, short_quiz.id).json()["attempt"]["id"]
        client.post(f"/api/v1/attempts/{abandoned_id}/abandon")
        take_quiz(test_learner.id, short_quiz, 4)
        start(client, test_learner.id, short_quiz.id)

        data = client.get(f"/api/v1/learners/{test_learner.id}/attempt-statistics").json()

        assert data["total_attempts"] == 3
        assert data["scored_attempts"] == 1
        assert data["passed_attempts"] == 1
        assert data["failed_attempts"] == 0
        assert data["pass_rate"] == 100.0

"""Unit tests for the HTTP routes over the in-memory store."""

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from predictably.config import IdentitySettings, Settings
from predictably.domain.service import QuestionService
from predictably.domain.value import QuestionId
from predictably.interface.api import app as app_module
from predictably.interface.api.app import create_app
from tests.di import build_test_container

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture
def client():
    """Client for an app wired to a fresh in-memory container."""
    container = build_test_container(extra_providers=[FastapiProvider()])
    with TestClient(create_app(container)) as test_client:
        yield test_client


def create_question(client: TestClient, question_id: str = "q1") -> None:
    response = client.post(
        "/api/questions",
        json={"text": "Sequels are better than originals", "question_id": question_id},
        headers=ALICE,
    )
    assert response.status_code == 201


def close_question(client: TestClient, question_id: str) -> None:
    """Close voting through the app's own container, on the app's event loop."""
    container = client.app.state.dishka_container

    async def _close() -> None:
        async with container() as request_container:
            question_service = await request_container.get(QuestionService)
            await question_service.close_question(QuestionId(question_id))

    client.portal.call(_close)


class TestHealth:
    """Tests for the health endpoint."""

    def test_health_is_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestVoteRoutes:
    """Tests for vote endpoints."""

    def test_vote_then_read_back(self, client):
        # Arrange
        create_question(client)

        # Act
        response = client.post(
            "/api/vote", json={"question_id": "q1", "value": 4}, headers=BOB
        )
        mine = client.get("/api/my-vote/q1", headers=BOB)

        # Assert
        assert response.status_code == 200
        assert response.json()["vote_histogram"]["total_votes"] == 1
        assert mine.json()["vote"]["value"] == 4

    def test_vote_without_identity_is_unauthorized(self, client):
        create_question(client)

        response = client.post("/api/vote", json={"question_id": "q1", "value": 4})

        assert response.status_code == 401

    def test_out_of_range_vote_is_bad_request(self, client):
        create_question(client)

        response = client.post(
            "/api/vote", json={"question_id": "q1", "value": 11}, headers=BOB
        )

        assert response.status_code == 400
        assert "between -10 and 10" in response.json()["error"]

    def test_vote_on_unknown_question_is_not_found(self, client):
        response = client.post(
            "/api/vote", json={"question_id": "nope", "value": 1}, headers=BOB
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Question not found"}

    def test_vote_on_closed_question_is_conflict(self, client):
        # Arrange
        create_question(client)
        close_question(client, "q1")

        # Act
        response = client.post(
            "/api/vote", json={"question_id": "q1", "value": 1}, headers=BOB
        )

        # Assert
        assert response.status_code == 409
        assert "closed" in response.json()["error"]


class TestPredictionRoutes:
    """Tests for prediction endpoints."""

    def test_predict_reports_correctness(self, client):
        # Arrange
        create_question(client)
        client.post("/api/vote", json={"question_id": "q1", "value": 2}, headers=ALICE)

        # Act
        response = client.post(
            "/api/predict",
            json={"question_id": "q1", "predicted_average": 3.5},
            headers=BOB,
        )
        mine = client.get("/api/my-prediction/q1", headers=BOB)

        # Assert
        assert response.status_code == 200
        assert response.json()["is_correct"] is True
        assert response.json()["actual_average"] == 2.0
        assert mine.json()["prediction"]["accuracy"] == 1.5

    def test_my_prediction_on_unknown_question_is_not_found(self, client):
        response = client.get("/api/my-prediction/nope", headers=BOB)

        assert response.status_code == 404


class TestUserRoutes:
    """Tests for per-user endpoints."""

    def test_history_and_stats(self, client):
        # Arrange
        create_question(client)
        client.post("/api/vote", json={"question_id": "q1", "value": -3}, headers=BOB)
        client.post(
            "/api/predict",
            json={"question_id": "q1", "predicted_average": -3},
            headers=BOB,
        )

        # Act
        history = client.get("/api/my-history", headers=BOB)
        stats = client.get("/api/my-stats", headers=BOB)

        # Assert
        assert history.json()["total_count"] == 1
        assert history.json()["user_history"][0]["my_vote"] == -3
        assert stats.json()["user_stats"]["total_votes"] == 1
        assert stats.json()["user_stats"]["correct_predictions"] == 1
        assert stats.json()["user_stats"]["current_streak"] == 1

    def test_stats_without_identity_is_unauthorized(self, client):
        assert client.get("/api/my-stats").status_code == 401

    def test_history_rejects_negative_offset(self, client):
        response = client.get("/api/my-history?offset=-1", headers=BOB)

        assert response.status_code == 422


class TestQuestionRoutes:
    """Tests for question endpoints."""

    def test_list_and_details(self, client):
        # Arrange
        create_question(client)

        # Act
        listing = client.get("/api/questions")
        details = client.get("/api/question-details/q1")

        # Assert
        assert [q["id"] for q in listing.json()["questions"]] == ["q1"]
        body = details.json()["question_details"]
        assert body["question"]["submitted_by"] == "alice"
        assert body["question"]["average_vote"] == 0.0
        assert len(body["vote_histogram"]["buckets"]) == 21

    def test_details_of_unknown_question_is_not_found(self, client):
        assert client.get("/api/question-details/nope").status_code == 404

    def test_short_question_is_bad_request(self, client):
        response = client.post("/api/questions", json={"text": "Why"}, headers=ALICE)

        assert response.status_code == 400

    def test_recreating_existing_question_is_conflict(self, client):
        # Arrange
        create_question(client)
        client.post("/api/vote", json={"question_id": "q1", "value": 3}, headers=BOB)
        close_question(client, "q1")

        # Act
        response = client.post(
            "/api/questions",
            json={"text": "Someone else's text here", "question_id": "q1"},
            headers=BOB,
        )

        # Assert
        assert response.status_code == 409
        assert "already exists" in response.json()["error"]
        question = client.get("/api/question-details/q1").json()["question_details"][
            "question"
        ]
        assert question["is_active"] is False
        assert question["total_votes"] == 1
        assert question["submitted_by"] == "alice"

    def test_zero_voting_window_is_bad_request(self, client):
        response = client.post(
            "/api/questions",
            json={"text": "Sequels are better than originals", "ttl_hours": 0},
            headers=ALICE,
        )

        assert response.status_code == 400
        assert "between 1 and 168 hours" in response.json()["error"]

    def test_create_question_requires_identity(self, client):
        response = client.post(
            "/api/questions", json={"text": "Sequels are better than originals"}
        )

        assert response.status_code == 401


class TestJobRoutes:
    """Tests for scheduled job endpoints."""

    def test_cleanup_with_nothing_to_purge(self, client):
        create_question(client)

        response = client.post("/internal/jobs/cleanup")

        assert response.status_code == 200
        assert response.json() == {"purged_count": 0, "purged_questions": []}


class TestAppFactory:
    """Tests for create_app wiring."""

    def test_request_spans_use_configured_identity_header(self, monkeypatch):
        # Arrange
        instrumented = {}

        def _record(app, identity_header="X-User-Id"):
            instrumented["identity_header"] = identity_header

        monkeypatch.setattr(app_module, "instrument_fastapi", _record)
        settings = Settings(identity=IdentitySettings(header_name="X-Player-Id"))

        # Act
        create_app(build_test_container(), settings=settings)

        # Assert
        assert instrumented == {"identity_header": "X-Player-Id"}

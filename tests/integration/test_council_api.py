"""Integration tests for the council HTTP API.

Service Endpoints:
- POST /v1/council/discuss
- GET /v1/council/sessions/{session_id}
- DELETE /v1/council/sessions/{session_id}
- POST /v1/council/consult
- POST /v1/council/personas/consult
- GET /v1/council/personas
- GET /health, /health/ready, /health/live
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from council_session.core.config import Settings
from council_session.main import create_app
from tests.fakes.fake_generator import FailingDraftGenerator, FakeDraftGenerator


CLEAR_REQUEST = "How should we design the architecture for our payment system?"


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(settings=test_settings, draft_generator=FakeDraftGenerator())


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


class TestDiscussEndpoint:
    """Tests for POST /v1/council/discuss."""

    def test_starts_session(self, client: TestClient) -> None:
        response = client.post("/v1/council/discuss", json={"requestText": CLEAR_REQUEST})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "debating"
        assert data["message"] == "Debate cycle 1 of 10 complete"
        assert data["currentState"]["sessionId"] == data["sessionId"]

    def test_continues_session(self, client: TestClient) -> None:
        first = client.post("/v1/council/discuss", json={"requestText": "help with stuff"}).json()

        second = client.post(
            "/v1/council/discuss",
            json={"sessionId": first["sessionId"], "answer": "Lower costs"},
        )

        assert second.status_code == 200
        assert second.json()["nextQuestion"]["question"] == "What constraints or deadlines should we consider?"

    def test_missing_request_text_is_400(self, client: TestClient) -> None:
        response = client.post("/v1/council/discuss", json={})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "validation"
        assert error["message"] == "requestText is required when starting a new session"
        assert error["path"] == "/v1/council/discuss"

    def test_unknown_persona_is_400(self, client: TestClient, app: FastAPI) -> None:
        response = client.post(
            "/v1/council/discuss",
            json={"requestText": CLEAR_REQUEST, "personasRequested": ["Wizard"]},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation"
        assert app.state.council_controller.manager.list_sessions() == []

    def test_generator_failure_is_500(self, test_settings: Settings) -> None:
        app = create_app(settings=test_settings, draft_generator=FailingDraftGenerator())

        with TestClient(app) as client:
            response = client.post("/v1/council/discuss", json={"requestText": CLEAR_REQUEST})

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "internal"
        assert error["message"] == "Unexpected error"


class TestSessionEndpoints:
    """Tests for GET/DELETE /v1/council/sessions/{id}."""

    def test_get_session(self, client: TestClient) -> None:
        created = client.post("/v1/council/discuss", json={"requestText": CLEAR_REQUEST}).json()

        response = client.get(f"/v1/council/sessions/{created['sessionId']}")

        assert response.status_code == 200
        assert response.json()["debateCycles"] == 1

    def test_get_unknown_session_is_404(self, client: TestClient) -> None:
        response = client.get("/v1/council/sessions/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "session_not_found"

    def test_delete_session(self, client: TestClient) -> None:
        created = client.post("/v1/council/discuss", json={"requestText": CLEAR_REQUEST}).json()
        session_id = created["sessionId"]

        response = client.delete(f"/v1/council/sessions/{session_id}")

        assert response.status_code == 200
        assert response.json() == {"sessionId": session_id, "deleted": True}
        assert client.get(f"/v1/council/sessions/{session_id}").status_code == 404

    def test_delete_unknown_session_is_404(self, client: TestClient) -> None:
        assert client.delete("/v1/council/sessions/missing").status_code == 404


class TestConsultEndpoints:
    """Tests for the stateless consultation routes."""

    def test_council_consult(self, client: TestClient, app: FastAPI) -> None:
        response = client.post(
            "/v1/council/consult",
            json={"userProblem": "Grow MRR", "depth": "brief"},
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["responses"]) == 14
        assert "Devil's Advocate" in [r["persona"] for r in data["responses"]]
        assert data["synthesis"]["notes"] == ["Depth: brief"]
        assert data["formatted"].startswith("# Council Consultation")
        assert app.state.council_controller.manager.list_sessions() == []

    def test_council_consult_unknown_persona_is_400(self, client: TestClient) -> None:
        response = client.post(
            "/v1/council/consult",
            json={"userProblem": "Grow MRR", "selectedPersonas": ["Wizard"]},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation"

    def test_persona_consult(self, client: TestClient) -> None:
        response = client.post(
            "/v1/council/personas/consult",
            json={"personaName": "Culture Lead", "userProblem": "Improve onboarding"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["persona"] == "Culture Lead"
        assert "- " in data["advice"]
        assert data["confidence"] == "medium"

    def test_persona_consult_unknown_persona_is_400(self, client: TestClient) -> None:
        response = client.post(
            "/v1/council/personas/consult",
            json={"personaName": "Wizard", "userProblem": "Improve onboarding"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Unknown persona: Wizard"

    def test_list_personas(self, client: TestClient) -> None:
        personas = client.get("/v1/council/personas").json()["personas"]

        assert len(personas) == 14
        assert personas[0]["name"] == "Growth Strategist"
        assert personas[0]["allowed_tools"] == ["council.consult", "persona.consult"]


class TestHealthEndpoints:
    def test_health(self, client: TestClient) -> None:
        client.post("/v1/council/discuss", json={"requestText": CLEAR_REQUEST})

        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["service"] == "council-session"
        assert data["active_sessions"] == 1
        assert data["uptime_seconds"] is not None

    def test_ready(self, client: TestClient) -> None:
        data = client.get("/health/ready").json()

        assert data["ready"] is True
        assert data["checks"] == {"controller_configured": True, "personas_loaded": True}

    def test_live(self, client: TestClient) -> None:
        assert client.get("/health/live").json()["alive"] is True

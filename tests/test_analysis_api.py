from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from feedback_ai.api.deps import get_analyzer
from feedback_ai.main import app
from feedback_ai.services.feedback_analyzer import FeedbackAnalyzer
from feedback_ai.services.rotation import CredentialPool


@pytest.fixture()
def client_with(scripted):
    def build(handler, credentials=("key-1",)):
        generator = scripted(handler)
        analyzer = FeedbackAnalyzer(generator, CredentialPool(credentials), ["gemini-2.0-flash"], attempt_timeout=None)
        app.dependency_overrides[get_analyzer] = lambda: analyzer
        return TestClient(app), generator

    yield build
    app.dependency_overrides.clear()


def test_health_endpoints(client_with) -> None:
    client, _ = client_with(lambda *_: "unused")

    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/api/v1/health").json() == {"status": "ok"}


def test_sentiment_endpoint(client_with) -> None:
    client, generator = client_with(lambda *_: "Positive")

    short = client.post("/api/v1/analysis/sentiment", json={"text": "ok"})
    full = client.post("/api/v1/analysis/sentiment", json={"text": "Loved the lab sessions"})

    assert short.status_code == 200
    assert short.json() == {"sentiment": "Neutral"}
    assert full.json() == {"sentiment": "Positive"}
    assert len(generator.calls) == 1


def test_subject_insights_endpoint_empty_feedback(client_with) -> None:
    client, generator = client_with(lambda *_: "unused")

    response = client.post("/api/v1/analysis/subject-insights", json={"label": "Data Structures", "feedbacks": []})

    assert response.status_code == 200
    assert response.json() == {
        "strengths": [],
        "improvements": [],
        "suggestions": ["No textual feedback available for analysis."],
        "areas_of_concern": [],
        "actionable_suggestions": [],
    }
    assert generator.calls == []


def test_staff_insights_endpoint(client_with) -> None:
    reply = json.dumps({"strengths": ["Clear"], "areas_of_concern": [], "actionable_suggestions": ["More examples"]})
    client, _ = client_with(lambda *_: reply)

    response = client.post("/api/v1/analysis/staff-insights", json={"label": "Dr. Codd", "feedbacks": ["clear"]})

    body = response.json()
    assert body["strengths"] == ["Clear"]
    assert body["actionable_suggestions"] == ["More examples"]
    assert body["improvements"] == []
    assert body["suggestions"] == []


def test_insights_require_label_field_but_accept_empty_label(client_with) -> None:
    reply = json.dumps({"strengths": [], "areas_of_concern": ["Pace"], "actionable_suggestions": []})
    client, generator = client_with(lambda *_: reply)

    missing = client.post("/api/v1/analysis/staff-insights", json={"feedbacks": ["x"]})
    empty = client.post("/api/v1/analysis/staff-insights", json={"label": "", "feedbacks": ["too fast"]})

    assert missing.status_code == 422
    assert empty.status_code == 200
    assert empty.json()["areas_of_concern"] == ["Pace"]
    assert len(generator.calls) == 1


def test_status_endpoint(client_with) -> None:
    client, _ = client_with(lambda *_: "unused", credentials=())

    body = client.get("/api/v1/analysis/status").json()

    assert body == {
        "has_credentials": False,
        "configured_credentials": 0,
        "available_credentials": 0,
        "exhausted_credentials": 0,
        "models": ["gemini-2.0-flash"],
        "preferred_model": "gemini-2.0-flash",
    }

import uuid

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from services.scorecard_engine.registry import ScorecardRegistry
from src.core.dependencies import get_scorecard_registry
from src.routers.leads import router as leads_router
from src.schemas.leads import is_valid_email

app = FastAPI()
app.include_router(leads_router, prefix="/api")

client = TestClient(app)


@pytest.fixture(autouse=True)
def registry(scorecard_config):
    app.dependency_overrides[get_scorecard_registry] = lambda: ScorecardRegistry([scorecard_config])
    yield
    app.dependency_overrides.clear()


def test_capture_lead():
    response = client.post("/api/leads", json={"email": "owner@example.com", "answers": {"q1": 4}})
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    uuid.UUID(body["leadId"])


def test_capture_lead_with_known_scorecard(scenario_a_answers):
    response = client.post(
        "/api/leads",
        json={"email": "owner@example.com", "slug": "test-scorecard", "answers": scenario_a_answers},
    )
    assert response.status_code == 200


def test_capture_lead_with_unknown_scorecard():
    response = client.post("/api/leads", json={"email": "owner@example.com", "slug": "nope"})
    assert response.status_code == 200


def test_lead_ids_are_unique():
    first = client.post("/api/leads", json={"email": "a@example.com"}).json()["leadId"]
    second = client.post("/api/leads", json={"email": "a@example.com"}).json()["leadId"]
    assert first != second


@pytest.mark.parametrize("body", [
    {},
    {"email": ""},
    {"email": "not-an-email"},
    {"email": "name@domain"},
    {"email": "two words@example.com"},
    {"email": 42},
])
def test_capture_lead_invalid_email(body):
    response = client.post("/api/leads", json=body)
    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Valid email is required."}


@pytest.mark.parametrize("body", [
    {"email": "not-an-email", "answers": "oops"},
    {"email": "not-an-email", "answers": {"q1": "high"}},
    {"email": None, "slug": ["test-scorecard"]},
])
def test_capture_lead_invalid_email_with_malformed_fields(body):
    response = client.post("/api/leads", json=body)
    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Valid email is required."}


@pytest.mark.parametrize("body", [
    {"email": "owner@example.com", "answers": ["q1", 4]},
    {"email": "owner@example.com", "slug": 7, "answers": {"q1": "high"}},
    {"email": "owner@example.com", "slug": "test-scorecard", "answers": None},
])
def test_capture_lead_tolerates_malformed_answers(body):
    response = client.post("/api/leads", json=body)
    assert response.status_code == 200
    assert response.json()["ok"] is True


@pytest.mark.parametrize("value, expected", [
    ("owner@example.com", True),
    ("first.last@sub.example.co", True),
    ("owner@example.com\n", False),
    ("@example.com", False),
    (None, False),
])
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected

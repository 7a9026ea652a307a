from fastapi.testclient import TestClient

from keycheck.main import app


client = TestClient(app)


def test_health_endpoint_returns_ok_status() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()

    assert payload["status"] == "ok"
    assert payload["service"] == "LLM Key Check API"
    assert payload["environment"] in {"dev", "prod", "test"}


def test_root_endpoint_returns_message() -> None:
    response = client.get("/")
    assert response.status_code == 200
    payload = response.json()

    assert "message" in payload
    assert "LLM Key Check API" in payload["message"]


def test_responses_carry_request_id_header() -> None:
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["x-request-id"] == "req-123"

from __future__ import annotations

from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from . import app as app_module


@pytest.fixture
def client() -> Iterable[TestClient]:
    with TestClient(app_module.app, raise_server_exceptions=False) as test_client:
        yield test_client


def test_health_endpoint_returns_uptime_and_version(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "uptime_seconds" in data
    assert "version" in data
    assert "X-Request-ID" in response.headers


def test_health_ready(client: TestClient) -> None:
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_id_header_is_reused_from_client(client: TestClient) -> None:
    custom_request_id = "test-request-123"
    response = client.get("/health", headers={"X-Request-ID": custom_request_id})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == custom_request_id


def test_unhandled_exception_returns_request_id(client: TestClient) -> None:
    if not any(
        getattr(route, "path", None) == "/_test-error"
        for route in app_module.app.router.routes
    ):
        @app_module.app.get("/_test-error")
        async def _raise_error():  # pragma: no cover - used only for tests
            raise RuntimeError("boom")

    response = client.get("/_test-error")
    assert response.status_code == 500
    data = response.json()
    assert "request_id" in data
    assert data["detail"].startswith("サーバー内部")
    assert response.headers["X-Request-ID"] == data["request_id"]


def test_parse_era_date(client: TestClient) -> None:
    response = client.post(
        "/api/dates/parse",
        json={"text": "令和六年三月十五日", "today": "2025-06-15"},
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["success"] is True
    assert data["date_iso"] == "2024-03-15"
    assert data["stage"] == "era_calendar"
    assert data["pattern"] is None
    assert data["today"] == "2025-06-15"


def test_parse_fiscal_month_uses_reference_date(client: TestClient) -> None:
    response = client.post("/api/dates/parse", json={"text": "1", "today": "2025-06-15"})
    data = response.json()
    assert data["date_iso"] == "2026-01-01"
    assert data["stage"] == "fiscal_month"


def test_parse_failure_is_not_an_error(client: TestClient) -> None:
    response = client.post("/api/dates/parse", json={"text": "invalid"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["date_iso"] is None
    assert data["stage"] is None


def test_parse_rejects_blank_text(client: TestClient) -> None:
    response = client.post("/api/dates/parse", json={"text": "   "})
    assert response.status_code == 422


def test_parse_rejects_oversized_text(monkeypatch, client: TestClient) -> None:
    monkeypatch.setattr(app_module.settings, "max_input_characters", 10)
    response = client.post("/api/dates/parse", json={"text": "2024/03/15" + " " * 20})
    assert response.status_code == 422


def test_parse_query_endpoint(client: TestClient) -> None:
    response = client.get("/api/dates/parse", params={"q": "2024/03/15"})
    assert response.status_code == 200
    data = response.json()
    assert data["date_iso"] == "2024-03-15"
    assert data["stage"] == "exact_format"
    assert data["pattern"] == "yyyy/MM/dd"


def test_parse_query_endpoint_rejects_blank(client: TestClient) -> None:
    response = client.get("/api/dates/parse", params={"q": " "})
    assert response.status_code == 422


def test_parse_batch_keeps_order_and_counts(client: TestClient) -> None:
    response = client.post(
        "/api/dates/parse-batch",
        json={"texts": ["2024/03/15", "弥生", "invalid"], "today": "2025-06-15"},
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["total"] == 3
    assert data["parsed"] == 2
    assert [result["date_iso"] for result in data["results"]] == ["2024-03-15", "2026-03-01", None]
    assert data["today"] == "2025-06-15"


def test_parse_batch_rejects_too_many_texts(monkeypatch, client: TestClient) -> None:
    monkeypatch.setattr(app_module.settings, "max_batch_size", 2)
    response = client.post("/api/dates/parse-batch", json={"texts": ["1", "2", "3"]})
    assert response.status_code == 422


def test_month_range(client: TestClient) -> None:
    response = client.get("/api/dates/month-range", params={"text": "2024年2月"})
    assert response.status_code == 200
    data = response.json()
    assert data["date_iso"] == "2024-02-01"
    assert data["first_date"] == "2024-02-01"
    assert data["end_date"] == "2024-02-29"


def test_month_range_not_found(client: TestClient) -> None:
    response = client.get("/api/dates/month-range", params={"text": "invalid"})
    assert response.status_code == 404
    assert "日付" in response.json()["detail"]

"""Tests for the HTTP endpoints."""

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from fintrack.core.logging import request_log_context
from fintrack.main import app


@pytest.fixture
def client():
    """Client with the app lifespan running (tables created, processor set)."""
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_healthz(self, client):
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_request_id_header(self, client):
        response = client.get("/", headers={"x-request-id": "req-123"})
        assert response.headers["x-request-id"] == "req-123"


class TestSmsEndpoints:
    """Tests for /sms routes."""

    def test_classify(self, client):
        response = client.post("/sms/classify", json={"message": "Rs.500 debited"})
        assert response.status_code == 200
        assert response.json() == {"is_financial": True}

        response = client.post("/sms/classify", json={"message": "Your OTP is 459201"})
        assert response.json() == {"is_financial": False}

    def test_classify_requires_message(self, client):
        response = client.post("/sms/classify", json={})
        assert response.status_code == 422

    def test_extract(self, client):
        response = client.post(
            "/sms/extract",
            json={"message": "You have received Rs.2,000.00 from merchant@upi on NEFT"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_financial"] is True
        assert data["transaction"]["direction"] == "CREDIT"
        assert data["transaction"]["transfer_mode"] == "NEFT"
        assert data["transaction"]["payment_identifier"] == "merchant@upi"
        assert data["transaction"]["counterparty_name"] == "merchant@upi"

    def test_extract_non_financial(self, client):
        response = client.post("/sms/extract", json={"message": "See you at 5"})

        assert response.json() == {"is_financial": False, "transaction": None}

    def test_extract_without_amount(self, client):
        response = client.post(
            "/sms/extract", json={"message": "Your account balance is low. Please top up."}
        )

        data = response.json()
        assert data["is_financial"] is True
        assert data["transaction"] is None

    def test_ingest_then_list(self, client):
        messages = [
            "Rs.500 debited from A/C XX1234 to John Doe on 12-05-24 via UPI Ref 123456",
            "INR 1,00,000 credited to account no: 50100234567 via IMPS",
            "Your OTP is 459201",
        ]
        statuses = [
            client.post("/sms/ingest", json={"message": m, "user_id": "api-user"}).json()["status"]
            for m in messages
        ]
        assert statuses == ["stored", "stored", "skipped"]

        response = client.get("/sms/users/api-user/transactions")
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["totals"]["debit"] == {"count": 1, "total": "500.00"}
        assert data["totals"]["credit"] == {"count": 1, "total": "100000.00"}

        response = client.get("/sms/users/api-user/transactions", params={"direction": "CREDIT"})
        data = response.json()
        assert data["direction"] == "CREDIT"
        assert data["count"] == 1
        assert data["transactions"][0]["transaction"]["transfer_mode"] == "IMPS"

    def test_ingest_requires_user(self, client):
        response = client.post("/sms/ingest", json={"message": "Rs.500 debited", "user_id": ""})
        assert response.status_code == 422

    def test_list_invalid_direction(self, client):
        response = client.get("/sms/users/api-user/transactions", params={"direction": "SIDEWAYS"})
        assert response.status_code == 422

    def test_list_unknown_user(self, client):
        response = client.get("/sms/users/nobody/transactions")

        assert response.status_code == 200
        assert response.json()["count"] == 0

    def test_metrics(self, client):
        client.post("/sms/ingest", json={"message": "Your OTP is 459201", "user_id": "m-user"})

        response = client.get("/sms/metrics")

        assert response.status_code == 200
        data = response.json()
        assert data["messages_received"] >= 1
        assert data["messages_skipped"] >= 1
        assert "extraction_rate" in data


def make_request(path: str, headers: list | None = None) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "server": ("testserver", 80),
            "path": path,
            "query_string": b"",
            "headers": headers or [],
        }
    )


class TestRequestLogContext:
    """Tests for the per-request log context."""

    def test_user_route_binds_user_id(self):
        context = request_log_context(make_request("/sms/users/alice/transactions"))

        assert context["user_id"] == "alice"
        assert context["path"] == "/sms/users/alice/transactions"

    def test_other_routes_have_no_user_id(self):
        context = request_log_context(make_request("/sms/extract"))

        assert "user_id" not in context

    def test_request_id_header_is_reused(self):
        context = request_log_context(make_request("/", [(b"x-request-id", b"req-9")]))

        assert context["request_id"] == "req-9"

    def test_request_id_generated_when_missing(self):
        first = request_log_context(make_request("/"))
        second = request_log_context(make_request("/"))

        assert first["request_id"] != second["request_id"]

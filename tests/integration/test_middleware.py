"""Integration tests for request middleware and error formatting."""

from unittest.mock import patch

from fastapi.testclient import TestClient


class TestRequestSizeLimit:
    """Tests for the request body size limit."""

    def test_oversized_body_returns_413(self, client: TestClient) -> None:
        with patch("src.api.middleware.request_size.get_settings") as mock_settings:
            mock_settings.return_value.max_request_body_size = 10

            response = client.post(
                "/api/v1/webhook",
                content=b"x" * 100,
                headers={"stripe-signature": "t=1,v1=abc"},
            )

        assert response.status_code == 413
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "request_too_large"


class TestErrorEnvelope:
    """Tests for the shared error response shape."""

    def test_unknown_route_uses_error_envelope(self, client: TestClient) -> None:
        response = client.get("/api/v1/nope")

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "http_error"
        assert "timestamp" in data

    def test_request_id_is_echoed(self, client: TestClient) -> None:
        response = client.get("/api/v1/orders", headers={"X-Request-ID": "req-42"})

        assert response.status_code == 401
        assert response.json()["request_id"] == "req-42"

"""Tests for the gateway health endpoints."""

import httpx

from usergate.gateway import create_app
from usergate.gateway.client import AuthServiceClient


def _unreachable_client():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    return AuthServiceClient(httpx.Client(transport=httpx.MockTransport(refuse), base_url="http://auth-service"))


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        """Liveness should report the gateway with a UTC timestamp."""
        response = client.get("/health")
        body = response.get_json()

        assert response.status_code == 200
        assert body["status"] == "ok"
        assert body["service"] == "gateway"
        assert body["timestamp"].endswith("Z")

    def test_health_does_not_contact_service(self, settings):
        """Liveness should succeed even with the service unreachable."""
        app = create_app(settings, client=_unreachable_client())
        with app.test_client() as client:
            assert client.get("/health").status_code == 200


class TestReady:
    """Tests for GET /health/ready."""

    def test_ready(self, client):
        """Readiness should be ok when the service and its database answer."""
        response = client.get("/health/ready")
        body = response.get_json()

        assert response.status_code == 200
        assert body["status"] == "ok"
        assert body["services"] == {"gateway": "up", "authentication": "ok"}

    def test_service_down(self, settings):
        """An unreachable service should give 503 with authentication down."""
        app = create_app(settings, client=_unreachable_client())
        with app.test_client() as client:
            response = client.get("/health/ready")
        body = response.get_json()

        assert response.status_code == 503
        assert body["status"] == "degraded"
        assert body["services"]["authentication"] == "down"

    def test_service_database_degraded(self, client, service_app, monkeypatch):
        """A service without its database should give 503 degraded."""
        monkeypatch.setattr(service_app.extensions["database"], "ping", lambda: False)

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.get_json()["services"]["authentication"] == "degraded"

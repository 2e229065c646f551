"""
Cross-cutting behaviour: API key guard, CORS/OPTIONS, method and route
errors, and the health check.
"""
import pytest

from supplier_hub.api.dependencies import get_order_relay
from supplier_hub.core.config import get_settings
from supplier_hub.main import app


@pytest.fixture
def settings_without_key(client, test_settings):
    unconfigured = test_settings.model_copy(update={"API_KEY": None})
    app.dependency_overrides[get_settings] = lambda: unconfigured
    return unconfigured


# ============================================
# AUTH GUARD
# ============================================

def test_missing_authorization_header(client, downstream):
    response = client.post("/api/orders/webhook", json={})

    assert response.status_code == 401
    body = response.json()
    assert body["status"] == 401
    assert body["message"] == "Missing or invalid Authorization header. Expected: Bearer <API_KEY>"
    assert downstream.calls == []


def test_non_bearer_authorization_header(client):
    response = client.get("/api/products/p1?supplierId=1", headers={"Authorization": "Basic abc"})

    assert response.status_code == 401


def test_wrong_api_key(client, downstream):
    response = client.post("/api/orders/webhook", json={}, headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid API key"
    assert downstream.calls == []


def test_server_without_api_key(client, settings_without_key, downstream):
    response = client.post("/api/orders/webhook", json={}, headers={"Authorization": "Bearer anything"})

    assert response.status_code == 500
    assert response.json()["message"] == "Server configuration error: API key not configured"
    assert downstream.calls == []


def test_auth_runs_before_body_validation(client):
    response = client.post("/api/products/sync", content="{broken", headers={"Content-Type": "application/json"})

    assert response.status_code == 401


# ============================================
# CORS / METHODS
# ============================================

def test_options_preflight(client, downstream):
    response = client.options("/api/orders/webhook")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type, Authorization"
    assert response.headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"
    assert downstream.calls == []


def test_options_needs_no_api_key(client):
    response = client.options("/api/products/p1/availability")

    assert response.status_code == 200
    assert "PATCH" in response.headers["Access-Control-Allow-Methods"]


def test_cors_headers_on_regular_responses(client, relay_headers):
    response = client.get("/api/orders/ord-1", headers=relay_headers)

    assert response.status_code == 400
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "GET" in response.headers["Access-Control-Allow-Methods"]


def test_wrong_method_is_405(client, relay_headers):
    response = client.delete("/api/orders/webhook", headers=relay_headers)

    assert response.status_code == 405
    body = response.json()
    assert body["status"] == 405
    assert body["message"] == "Method not allowed"
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_put_on_sync_is_405(client, relay_headers):
    response = client.put("/api/products/sync", json={}, headers=relay_headers)

    assert response.status_code == 405


def test_unexpected_failure_is_enveloped_500(client, downstream, relay_headers):
    def broken_relay():
        raise RuntimeError("relay wiring broke")

    app.dependency_overrides[get_order_relay] = broken_relay

    response = client.get("/api/orders/ord-1?supplierId=1", headers=relay_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == 500
    assert body["message"] == "Internal server error"
    assert body["data"] is None
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert downstream.calls == []


def test_unknown_route_is_enveloped_404(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    body = response.json()
    assert body["status"] == 404
    assert "timestamp" in body


# ============================================
# HEALTH
# ============================================

def test_health_ok(client, downstream):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Integration API is healthy"
    data = body["data"]
    assert data["status"] == "healthy"
    assert data["environment"] == "test"
    assert data["configuration"]["apiKeyConfigured"] is True
    assert data["configuration"]["missingEnvVars"] is None
    assert "POST /api/orders/webhook" in data["endpoints"]
    assert downstream.calls == []


def test_health_degraded_without_api_key(client, settings_without_key):
    response = client.get("/api/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == 503
    assert body["message"] == "Integration API is degraded"
    assert body["data"]["configuration"]["missingEnvVars"] == ["API_KEY"]


def test_health_at_root(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["data"]["service"] == "Integration API"

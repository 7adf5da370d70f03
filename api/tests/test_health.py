"""Health check tests."""


def test_healthcheck_endpoint(client):
    """Test liveness endpoint."""
    response = client.get("/healthcheck")
    assert response.status_code == 200
    assert response.json() == {"message": "Ok"}


def test_health_endpoint(client):
    """Test readiness endpoint with a reachable database."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["db"] == "connected"


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Welcome to the SchildCafé!"


def test_unknown_route(client):
    response = client.get("/no-such-page")
    assert response.status_code == 404
    assert response.json() == {"code": "PAGE_NOT_FOUND", "message": "Page not found"}


def test_request_id_is_generated(client):
    response = client.get("/healthcheck")
    assert response.headers["X-Request-Id"]


def test_request_id_is_echoed(client):
    response = client.get("/healthcheck", headers={"X-Request-Id": "abc-123"})
    assert response.headers["X-Request-Id"] == "abc-123"

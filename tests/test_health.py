from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from claudle.app.core.config import settings
from claudle.app.main import create_app


def test_health(client, limiter):
    limiter.check_limit("1.2.3.4", "/api/claude/get-hint")

    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["components"]["rate_limiter"]["tracked_keys"] == 1
    assert "/api/claude/get-hint" in data["components"]["rate_limiter"]["routes"]
    assert data["components"]["provider"] == {"status": "ok", "type": "MockProvider"}


def test_lifespan_builds_provider_and_sweeper(limiter):
    with patch.object(settings, "mock_provider", True):
        app = create_app(rate_limiter=limiter)
        with TestClient(app) as client:
            assert app.state.rate_limit_sweeper.is_running is True
            data = client.get("/health").json()
            assert data["components"]["provider"]["type"] == "MockProvider"

    assert app.state.rate_limit_sweeper.is_running is False


def test_unhandled_errors_are_hidden(limiter, game_master):
    app = create_app(rate_limiter=limiter, game_master=game_master)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret detail")

    client = TestClient(app, raise_server_exceptions=False)
    with patch.object(settings, "debug", False):
        resp = client.get("/boom")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "internal_error"
    assert "secret detail" not in body["message"]


def test_health_reports_degraded_provider(limiter, mock_provider, game_master):
    mock_provider.health_check = AsyncMock(return_value=False)
    client = TestClient(create_app(rate_limiter=limiter, game_master=game_master))

    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["components"]["provider"]["status"] == "degraded"

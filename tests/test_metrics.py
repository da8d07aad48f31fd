from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from conftest import USER_INFO_URL, json_response
from oauth_login.api.main import create_app
from oauth_login.core import config


def _metrics_client():
    settings = config.TestSettings(
        GITHUB_CLIENT_ID="id",
        GITHUB_CLIENT_SECRET="secret",
        METRICS_ENABLED=True,
        _env_file=None,
    )
    return TestClient(create_app(settings))


def _sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


def test_metrics_endpoint_available_when_enabled():
    client = _metrics_client()

    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert "oauth_logins_total" in resp.text
    assert "oauth_login_redirects_total" in resp.text


def test_metrics_endpoint_hidden_by_default(client):
    resp = client.get("/metrics")

    assert resp.status_code == 404
    assert resp.text == "404 - Not found."


def test_login_outcomes_are_counted(mock_http):
    client = _metrics_client()
    redirects = _sample("oauth_login_redirects_total")
    logins = _sample("oauth_logins_total")
    failures = _sample("oauth_login_failures_total", {"stage": "awaiting_callback"})
    mock_http.post = AsyncMock(return_value=json_response(200, {"access_token": "abc"}))
    mock_http.get = AsyncMock(return_value=json_response(200, {"name": "Alice"}, method="GET", url=USER_INFO_URL))

    client.get("/login", follow_redirects=False)
    client.get("/oauth2callback?code=XYZ")
    client.get("/oauth2callback?error=access_denied")

    assert _sample("oauth_login_redirects_total") == redirects + 1
    assert _sample("oauth_logins_total") == logins + 1
    assert _sample("oauth_login_failures_total", {"stage": "awaiting_callback"}) == failures + 1

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient

from oauth_login.api.main import create_app
from oauth_login.core import config
from oauth_login.services.oauth import ClientCredentials, GitHubOAuthProvider

TOKEN_URL = "https://github.com/login/oauth/access_token"
USER_INFO_URL = "https://api.github.com/user"


def json_response(status_code: int, payload, method: str = "POST", url: str = TOKEN_URL) -> httpx.Response:
    """Real httpx response so raise_for_status()/json() behave as in production."""
    return httpx.Response(status_code, json=payload, request=httpx.Request(method, url))


def text_response(status_code: int, text: str, method: str = "POST", url: str = TOKEN_URL) -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request(method, url))


@pytest.fixture(autouse=True)
def _clear_credential_env(monkeypatch):
    """Keep developer credentials in the environment out of the tests."""
    for name in ("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET", "GITHUB_PROPERTIES_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_settings():
    return config.TestSettings(
        GITHUB_CLIENT_ID="test-client-id",
        GITHUB_CLIENT_SECRET="test-client-secret",
        _env_file=None,
    )


@pytest.fixture
def unconfigured_settings():
    return config.TestSettings(_env_file=None)


@pytest.fixture
def credentials():
    return ClientCredentials(client_id="test-client-id", client_secret="test-client-secret")


@pytest.fixture
def provider(credentials):
    return GitHubOAuthProvider(credentials=credentials)


@pytest.fixture
def mock_http():
    """Patch httpx.AsyncClient; yields the client object used inside ``async with``."""
    with patch("httpx.AsyncClient") as mock_client:
        yield mock_client.return_value.__aenter__.return_value


@pytest.fixture
def client(test_settings):
    """Provide a FastAPI TestClient bound to a configured application."""
    return TestClient(create_app(test_settings))

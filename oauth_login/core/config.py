from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "OAuth Login"
    ENV: str = "dev"
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"

    # OAuth 2.0 client registration (GitHub OAuth App)
    GITHUB_CLIENT_ID: str | None = None
    GITHUB_CLIENT_SECRET: str | None = None
    # Optional properties file with github.client.id / github.client.secret
    GITHUB_PROPERTIES_FILE: str | None = None

    # Provider endpoints
    OAUTH_AUTHORIZE_URL: str = "https://github.com/login/oauth/authorize"
    OAUTH_TOKEN_URL: str = "https://github.com/login/oauth/access_token"
    OAUTH_USER_INFO_URL: str = "https://api.github.com/user"
    OAUTH_CALLBACK_PATH: str = "/oauth2callback"
    OAUTH_HTTP_TIMEOUT: float = 10.0
    # GitHub's legacy convention: access token as a query parameter
    OAUTH_TOKEN_IN_QUERY: bool = True

    METRICS_ENABLED: bool = False
    CONTENT_SECURITY_POLICY: str = "default-src 'self'"
    HSTS_SECONDS: int = 31_536_000

    @field_validator("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET", mode="before")
    @classmethod
    def blank_credentials_to_none(cls, v):
        """Treat empty/whitespace-only credential values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("OAUTH_CALLBACK_PATH")
    @classmethod
    def callback_path_is_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            return "/" + v
        return v

    @model_validator(mode="after")
    def _validate_endpoints(self) -> BaseAppSettings:
        if self.ENV.lower() == "prod":
            insecure = [
                name
                for name in ("OAUTH_AUTHORIZE_URL", "OAUTH_TOKEN_URL", "OAUTH_USER_INFO_URL")
                if not getattr(self, name).startswith("https://")
            ]
            if insecure:
                raise ValueError("Provider endpoints must use https in production: " + ", ".join(insecure))
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "DEBUG"


class TestSettings(BaseAppSettings):
    ENV: str = "test"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()

"""OAuth login flow exceptions."""
from __future__ import annotations

import enum


class CallbackFailure(str, enum.Enum):
    """Why a provider callback could not yield an authorization code."""

    PROVIDER_ERROR = "provider_error"
    MISSING_CODE = "missing_code"


class OAuthFlowError(Exception):
    """Base class for every failure that ends a login flow."""


class ConfigurationError(OAuthFlowError):
    """Raised when the client id/secret are not configured."""


class CallbackError(OAuthFlowError):
    """Raised when the provider callback carries an error or no code."""

    def __init__(self, reason: CallbackFailure, provider_error: str | None = None):
        message = f"OAuth callback rejected: {reason.value}"
        if provider_error:
            message = f"{message} ({provider_error})"
        super().__init__(message)
        self.reason = reason
        self.provider_error = provider_error


class OAuthProviderError(OAuthFlowError):
    """Raised when OAuth provider communication fails."""


class TokenExchangeError(OAuthProviderError):
    """Raised when the code-for-token exchange fails."""

    def __init__(self, message: str, error_detail: str | None = None):
        super().__init__(message)
        self.error_detail = error_detail


class ProfileFetchError(OAuthProviderError):
    """Raised when fetching the user profile fails."""

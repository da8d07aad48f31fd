"""Value objects passed between the stages of a login flow.

None of these outlive the request that produced them.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from .exceptions import CallbackFailure, OAuthFlowError


@dataclass(frozen=True)
class ClientCredentials:
    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return f"ClientCredentials(client_id={self.client_id!r}, client_secret='***')"


@dataclass(frozen=True)
class AuthorizationRequest:
    authorize_endpoint: str
    client_id: str
    redirect_uri: str


@dataclass(frozen=True)
class CallbackResult:
    """Outcome of parsing a provider callback: either a code or a failure reason."""

    code: str | None = None
    failure: CallbackFailure | None = None
    provider_error: str | None = None

    @classmethod
    def success(cls, code: str) -> CallbackResult:
        return cls(code=code)

    @classmethod
    def failed(cls, reason: CallbackFailure, provider_error: str | None = None) -> CallbackResult:
        return cls(failure=reason, provider_error=provider_error)

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass(frozen=True)
class TokenResponse:
    access_token: str
    token_type: str = "bearer"
    scope: str | None = None

    def __repr__(self) -> str:
        return f"TokenResponse(access_token='***', token_type={self.token_type!r}, scope={self.scope!r})"


@dataclass(frozen=True)
class UserProfile:
    display_name: str
    raw_fields: dict[str, Any] = field(default_factory=dict)


class FlowState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_CALLBACK = "awaiting_callback"
    EXCHANGING_TOKEN = "exchanging_token"
    FETCHING_PROFILE = "fetching_profile"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class FlowOutcome:
    """Terminal state of one request's pass through the flow."""

    state: FlowState
    redirect_url: str | None = None
    profile: UserProfile | None = None
    failed_stage: FlowState | None = None
    error: OAuthFlowError | Exception | None = None

    @property
    def is_redirect(self) -> bool:
        """A login request that produced a provider redirect."""
        return self.state is FlowState.AWAITING_CALLBACK and self.redirect_url is not None

    @property
    def is_completed(self) -> bool:
        """A callback that ended with a user profile."""
        return self.state is FlowState.COMPLETED and self.profile is not None

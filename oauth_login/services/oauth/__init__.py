"""OAuth 2.0 authorization code login.

Pieces, leaves first:
- credentials: client id/secret loading
- providers: redirect building, token exchange, profile fetch
- callback: callback parameter validation
- service: per-request flow orchestration
"""
from .callback import parse_callback
from .credentials import load_client_credentials
from .exceptions import (
    CallbackError,
    CallbackFailure,
    ConfigurationError,
    OAuthFlowError,
    OAuthProviderError,
    ProfileFetchError,
    TokenExchangeError,
)
from .factory import create_oauth_flow
from .models import (
    AuthorizationRequest,
    CallbackResult,
    ClientCredentials,
    FlowOutcome,
    FlowState,
    TokenResponse,
    UserProfile,
)
from .providers import GitHubOAuthProvider, OAuthProvider
from .service import OAuthLoginFlow

__all__ = [
    # Exceptions
    "OAuthFlowError",
    "ConfigurationError",
    "CallbackError",
    "CallbackFailure",
    "OAuthProviderError",
    "TokenExchangeError",
    "ProfileFetchError",
    # Models
    "AuthorizationRequest",
    "CallbackResult",
    "ClientCredentials",
    "FlowOutcome",
    "FlowState",
    "TokenResponse",
    "UserProfile",
    # Providers
    "OAuthProvider",
    "GitHubOAuthProvider",
    # Flow
    "parse_callback",
    "load_client_credentials",
    "OAuthLoginFlow",
    "create_oauth_flow",
]

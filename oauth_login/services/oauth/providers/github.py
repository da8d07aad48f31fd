"""GitHub OAuth App implementation."""
from typing import Any

from ..models import ClientCredentials, UserProfile
from .base import OAuthProvider

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_INFO_URL = "https://api.github.com/user"


class GitHubOAuthProvider(OAuthProvider):
    """GitHub OAuth App; endpoints can be pointed at a compatible server."""

    def __init__(
        self,
        credentials: ClientCredentials,
        authorize_url: str = GITHUB_AUTHORIZE_URL,
        token_url: str = GITHUB_TOKEN_URL,
        user_info_url: str = GITHUB_USER_INFO_URL,
        **kwargs: Any,
    ):
        super().__init__(credentials, **kwargs)
        self._authorize_url = authorize_url
        self._token_url = token_url
        self._user_info_url = user_info_url

    @property
    def authorization_url(self) -> str:
        return self._authorize_url

    @property
    def token_url(self) -> str:
        return self._token_url

    @property
    def user_info_url(self) -> str:
        return self._user_info_url

    def extract_user_profile(self, user_info: dict[str, Any]) -> UserProfile:
        """
        Build a profile from GitHub's ``/user`` response.

        ``name`` is optional on GitHub accounts; ``login`` always exists.
        """
        display_name = user_info.get("name") or user_info.get("login") or ""
        return UserProfile(display_name=str(display_name), raw_fields=dict(user_info))

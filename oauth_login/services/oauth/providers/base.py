"""Abstract base class for OAuth 2.0 providers.

Implements the OAuth 2.0 authorization code flow.
Subclasses supply the provider endpoints and profile mapping.
"""
import hashlib
import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx

from ..exceptions import ProfileFetchError, TokenExchangeError
from ..models import AuthorizationRequest, ClientCredentials, TokenResponse, UserProfile

logger = logging.getLogger(__name__)


def _fingerprint(value: str) -> str:
    """Short, non-reversible tag for correlating secrets in logs."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:12]


def _error_detail(payload: Any) -> str | None:
    if not isinstance(payload, dict) or not payload.get("error"):
        return None
    detail = str(payload["error"])
    if payload.get("error_description"):
        detail = f"{detail}: {payload['error_description']}"
    return detail


class OAuthProvider(ABC):
    """
    Abstract base class for OAuth 2.0 providers.

    A provider is immutable once built and safe to share between
    concurrent requests: every call opens its own HTTP client.
    """

    def __init__(
        self,
        credentials: ClientCredentials,
        callback_path: str = "/oauth2callback",
        timeout: float = 10.0,
        token_in_query: bool = True,
    ):
        """
        Initialize OAuth provider.

        Args:
            credentials: Registered client id/secret
            callback_path: Path the provider redirects back to on this host
            timeout: Per-request timeout (seconds) for outbound calls
            token_in_query: Send the access token as a query parameter
                instead of an Authorization header when fetching the profile
        """
        self.credentials = credentials
        self.callback_path = callback_path
        self.timeout = timeout
        self.token_in_query = token_in_query

    @property
    @abstractmethod
    def authorization_url(self) -> str:
        """Provider's authorization endpoint."""
        pass

    @property
    @abstractmethod
    def token_url(self) -> str:
        """Provider's token exchange endpoint."""
        pass

    @property
    @abstractmethod
    def user_info_url(self) -> str:
        """Provider's user info endpoint."""
        pass

    def callback_uri_for(self, request_url: str) -> str:
        """Same scheme and host as ``request_url``, fixed callback path, no query."""
        parts = urlsplit(request_url)
        return urlunsplit((parts.scheme, parts.netloc, self.callback_path, "", ""))

    def build_authorization_request(self, request_url: str) -> AuthorizationRequest:
        return AuthorizationRequest(
            authorize_endpoint=self.authorization_url,
            client_id=self.credentials.client_id,
            redirect_uri=self.callback_uri_for(request_url),
        )

    def get_authorization_url(self, request_url: str) -> str:
        """
        Generate the provider redirect for step 1 of the flow.

        Args:
            request_url: URL of the inbound login request

        Returns:
            Authorization URL with ``client_id`` and ``redirect_uri``
        """
        auth_request = self.build_authorization_request(request_url)
        params = {
            "client_id": auth_request.client_id,
            "redirect_uri": auth_request.redirect_uri,
        }
        separator = "&" if "?" in auth_request.authorize_endpoint else "?"
        return f"{auth_request.authorize_endpoint}{separator}{urlencode(params)}"

    async def exchange_code_for_token(self, code: str, redirect_uri: str) -> TokenResponse:
        """
        Exchange authorization code for access token.

        Args:
            code: Authorization code from OAuth callback
            redirect_uri: Callback URI used in the authorization request

        Returns:
            TokenResponse with the access token

        Raises:
            TokenExchangeError: If token exchange fails
        """
        data = {
            "code": code,
            "redirect_uri": redirect_uri,
        }
        headers = {"Accept": "application/json"}
        auth = (self.credentials.client_id, self.credentials.client_secret)

        code_hash = _fingerprint(code)
        logger.info(
            "Token exchange attempt | code_hash=%s client_id=%s redirect_uri=%s",
            code_hash,
            self.credentials.client_id,
            redirect_uri,
        )

        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers=headers,
                    auth=auth,
                    timeout=self.timeout,
                )
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as e:
                detail = self._parse_error_body(e.response)
                logger.error(
                    "Token exchange failed | code_hash=%s status=%s detail=%r",
                    code_hash,
                    e.response.status_code,
                    detail,
                )
                raise TokenExchangeError(
                    f"Token exchange failed: {e.response.status_code}", error_detail=detail
                ) from e
            except httpx.RequestError as e:
                logger.error("Token exchange request failed: %s", e)
                raise TokenExchangeError("Failed to connect to OAuth provider", error_detail=str(e)) from e
            except ValueError as e:
                logger.error("Token response is not valid JSON | code_hash=%s", code_hash)
                raise TokenExchangeError("Token response is not valid JSON") from e

        detail = _error_detail(payload)
        if detail:
            logger.error("Error in token response | code_hash=%s detail=%r", code_hash, detail)
            raise TokenExchangeError(f"Provider rejected token request: {detail}", error_detail=detail)

        if not isinstance(payload, dict) or not payload.get("access_token"):
            logger.error("No access token in token response | code_hash=%s", code_hash)
            raise TokenExchangeError("No access token in response")

        logger.info("Token exchange SUCCESS | code_hash=%s", code_hash)
        return TokenResponse(
            access_token=payload["access_token"],
            token_type=payload.get("token_type") or "bearer",
            scope=payload.get("scope"),
        )

    async def get_user_info(self, access_token: str) -> dict[str, Any]:
        """
        Fetch user information using access token.

        Args:
            access_token: OAuth access token

        Returns:
            Raw user profile JSON object

        Raises:
            ProfileFetchError: If fetching user info fails
        """
        if self.token_in_query:
            request_kwargs: dict[str, Any] = {"params": {"access_token": access_token}}
        else:
            request_kwargs = {"headers": {"Authorization": f"Bearer {access_token}"}}

        async with httpx.AsyncClient() as client:
            try:
                response = await client.get(self.user_info_url, timeout=self.timeout, **request_kwargs)
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as e:
                logger.error("User info fetch failed: status=%s", e.response.status_code)
                raise ProfileFetchError(f"User info fetch failed: {e.response.status_code}") from e
            except httpx.RequestError as e:
                logger.error("User info request failed: %s", e)
                raise ProfileFetchError("Failed to connect to OAuth provider") from e
            except ValueError as e:
                logger.error("Error while parsing user info JSON: %s", e)
                raise ProfileFetchError("User info response is not valid JSON") from e

        if not isinstance(payload, dict):
            logger.error("User info response is not a JSON object: %s", type(payload).__name__)
            raise ProfileFetchError("User info response is not a JSON object")
        return payload

    async def fetch_profile(self, access_token: str) -> UserProfile:
        user_info = await self.get_user_info(access_token)
        return self.extract_user_profile(user_info)

    @abstractmethod
    def extract_user_profile(self, user_info: dict[str, Any]) -> UserProfile:
        """
        Map the provider's user info response onto a UserProfile.

        Args:
            user_info: Raw user info from provider
        """
        pass

    @staticmethod
    def _parse_error_body(response: httpx.Response) -> str | None:
        try:
            payload = response.json()
        except ValueError:
            return None
        return _error_detail(payload)

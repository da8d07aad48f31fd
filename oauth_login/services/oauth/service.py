"""Login flow orchestration.

Responsibilities:
- Build the provider redirect for a login request
- Drive a callback through validate -> token exchange -> profile fetch
- Convert every stage failure into a FAILED outcome

Nothing is remembered between requests; each call reconstructs what it
needs from the inbound URL and query parameters.
"""
import logging
from collections.abc import Mapping

import httpx

from .callback import parse_callback
from .exceptions import CallbackError, ConfigurationError, OAuthFlowError
from .models import ClientCredentials, FlowOutcome, FlowState
from .providers import OAuthProvider

logger = logging.getLogger(__name__)


class OAuthLoginFlow:
    """
    Stateless coordinator for the authorization code flow.

    Holds only read-only configuration, so one instance serves all
    concurrent requests.
    """

    def __init__(
        self,
        provider: OAuthProvider | None,
        configuration_error: ConfigurationError | None = None,
    ):
        """
        Initialize the flow.

        Args:
            provider: Configured provider, or None when credentials are missing
            configuration_error: Why the provider could not be built
        """
        if provider is None and configuration_error is None:
            configuration_error = ConfigurationError("OAuth provider not configured")
        self._provider = provider
        self._configuration_error = configuration_error

    @property
    def is_configured(self) -> bool:
        return self._provider is not None

    @property
    def credentials(self) -> ClientCredentials | None:
        return self._provider.credentials if self._provider else None

    def _require_provider(self) -> OAuthProvider:
        if self._provider is None:
            raise self._configuration_error  # type: ignore[misc]
        return self._provider

    @staticmethod
    def _transition(current: FlowState, new: FlowState) -> FlowState:
        logger.debug("OAuth flow %s -> %s", current.value, new.value)
        return new

    @staticmethod
    def _failed(stage: FlowState, error: Exception) -> FlowOutcome:
        logger.error("OAuth login failed during %s: %r", stage.value, str(error))
        return FlowOutcome(state=FlowState.FAILED, failed_stage=stage, error=error)

    def initiate(self, request_url: str) -> FlowOutcome:
        """
        Handle a login request: compute the provider redirect.

        Args:
            request_url: Full URL of the inbound login request

        Returns:
            AWAITING_CALLBACK outcome with ``redirect_url``, or FAILED when
            credentials are not configured
        """
        try:
            provider = self._require_provider()
        except ConfigurationError as e:
            return self._failed(FlowState.IDLE, e)

        redirect_url = provider.get_authorization_url(request_url)
        state = self._transition(FlowState.IDLE, FlowState.AWAITING_CALLBACK)
        logger.debug("Sending redirect to %s", redirect_url)
        return FlowOutcome(state=state, redirect_url=redirect_url)

    async def complete(self, request_url: str, query: Mapping[str, str]) -> FlowOutcome:
        """
        Handle the provider callback.

        Complete OAuth flow:
        1. Validate the callback parameters
        2. Exchange code for access token
        3. Fetch the user profile

        The profile fetch never starts unless the token exchange succeeded.

        Args:
            request_url: Full URL of the inbound callback request
            query: Decoded callback query parameters

        Returns:
            COMPLETED outcome with ``profile``, or FAILED with ``failed_stage``
        """
        state = FlowState.AWAITING_CALLBACK
        try:
            provider = self._require_provider()

            result = parse_callback(query)
            if not result.ok:
                raise CallbackError(result.failure, result.provider_error)  # type: ignore[arg-type]
            logger.debug("Received authorization code.")

            state = self._transition(state, FlowState.EXCHANGING_TOKEN)
            token = await provider.exchange_code_for_token(
                result.code,  # type: ignore[arg-type]
                provider.callback_uri_for(request_url),
            )

            state = self._transition(state, FlowState.FETCHING_PROFILE)
            logger.debug("Access token received. Fetching user details.")
            profile = await provider.fetch_profile(token.access_token)

            state = self._transition(state, FlowState.COMPLETED)
            logger.info("User details received for %s", profile.display_name or "<unnamed>")
            return FlowOutcome(state=state, profile=profile)
        except OAuthFlowError as e:
            return self._failed(state, e)
        except httpx.HTTPError as e:
            return self._failed(state, e)

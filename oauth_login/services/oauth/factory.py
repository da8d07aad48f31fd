"""Factory function for creating the configured login flow."""
import logging

from oauth_login.core.config import BaseAppSettings, settings

from .credentials import load_client_credentials
from .exceptions import ConfigurationError
from .providers import GitHubOAuthProvider
from .service import OAuthLoginFlow

logger = logging.getLogger(__name__)


def create_oauth_flow(app_settings: BaseAppSettings | None = None) -> OAuthLoginFlow:
    """
    Build the login flow from settings.

    Missing credentials are logged here, once; the flow is still returned
    so the server can start, but every login attempt will fail.

    Args:
        app_settings: Settings to use (defaults to the process settings)

    Returns:
        OAuthLoginFlow instance
    """
    app_settings = app_settings or settings

    try:
        credentials = load_client_credentials(app_settings)
    except ConfigurationError as e:
        logger.error("%s", e)
        return OAuthLoginFlow(provider=None, configuration_error=e)

    provider = GitHubOAuthProvider(
        credentials=credentials,
        authorize_url=app_settings.OAUTH_AUTHORIZE_URL,
        token_url=app_settings.OAUTH_TOKEN_URL,
        user_info_url=app_settings.OAUTH_USER_INFO_URL,
        callback_path=app_settings.OAUTH_CALLBACK_PATH,
        timeout=app_settings.OAUTH_HTTP_TIMEOUT,
        token_in_query=app_settings.OAUTH_TOKEN_IN_QUERY,
    )
    logger.info("GitHub OAuth provider enabled (client_id=%s)", credentials.client_id)
    return OAuthLoginFlow(provider=provider)

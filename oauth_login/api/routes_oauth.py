"""
OAuth 2.0 login routes.

Endpoints:
- /                    - Landing page with a login link
- /login               - Redirect to the OAuth provider
- /oauth2callback      - Handle the provider callback (path from
                         OAUTH_CALLBACK_PATH, mounted by create_app)

Only the HTTP layer lives here; the flow itself is in OAuthLoginFlow.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from oauth_login import metrics
from oauth_login.api.dependencies import get_oauth_flow
from oauth_login.services.oauth import FlowOutcome, OAuthLoginFlow

logger = logging.getLogger(__name__)
router = APIRouter(tags=["oauth"])

# Routes answer on path alone; other methods fall through to the not-found body
ROUTE_METHODS = ["GET", "HEAD", "POST"]

LANDING_PAGE = '<html><body><a href="/login">login</a></body></html>'
LOGIN_FAILED_BODY = "Login failed."
WELCOME_TEMPLATE = "Welcome {name}, you are now logged in."


def _login_failed(outcome: FlowOutcome | None = None) -> PlainTextResponse:
    stage = outcome.failed_stage.value if outcome and outcome.failed_stage else "unexpected"
    metrics.record_login_failure(stage)
    return PlainTextResponse(LOGIN_FAILED_BODY, status_code=500)


@router.api_route("/", methods=ROUTE_METHODS, response_class=HTMLResponse)
async def landing_page() -> HTMLResponse:
    return HTMLResponse(LANDING_PAGE)


@router.api_route("/login", methods=ROUTE_METHODS)
async def oauth_login(
    request: Request,
    flow: Annotated[OAuthLoginFlow, Depends(get_oauth_flow)],
) -> Response:
    """
    Initiate OAuth login flow.

    Redirects the browser to the provider's authorization page with a
    ``redirect_uri`` pointing back at this host's callback path.
    """
    try:
        outcome = flow.initiate(str(request.url))
    except Exception as e:  # noqa: BLE001
        logger.exception("Unexpected error while building OAuth redirect: %s", e)
        return _login_failed()

    if not outcome.is_redirect:
        return _login_failed(outcome)

    metrics.record_login_redirect()
    logger.info("Initiating OAuth login")
    return RedirectResponse(url=outcome.redirect_url, status_code=302)


async def oauth_callback(
    request: Request,
    flow: Annotated[OAuthLoginFlow, Depends(get_oauth_flow)],
) -> Response:
    """
    Handle OAuth provider callback.

    Query parameters are provider-defined (``code``, ``error``). Any failure
    yields a generic 500; details only go to the server log.
    """
    try:
        outcome = await flow.complete(str(request.url), dict(request.query_params))
    except Exception as e:  # noqa: BLE001
        logger.exception("Unexpected error during OAuth callback: %s", e)
        return _login_failed()

    if not outcome.is_completed:
        return _login_failed(outcome)

    metrics.record_login_success()
    return PlainTextResponse(WELCOME_TEMPLATE.format(name=outcome.profile.display_name))

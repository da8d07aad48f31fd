from __future__ import annotations

from fastapi import Request

from oauth_login.services.oauth import OAuthLoginFlow


def get_oauth_flow(request: Request) -> OAuthLoginFlow:
    """The process-wide login flow built at application startup."""
    return request.app.state.oauth_flow

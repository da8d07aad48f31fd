"""Metrics facade.

Route and service code should ONLY call the semantic helpers here.
"""

from __future__ import annotations

import logging

from prometheus_client import Counter

logger = logging.getLogger("metrics")

_LOGIN_REDIRECTS = Counter("oauth_login_redirects_total", "Login requests redirected to the OAuth provider")
_LOGINS = Counter("oauth_logins_total", "Successful OAuth login callbacks")
_LOGIN_FAILURES = Counter(
    "oauth_login_failures_total", "Failed OAuth login attempts", labelnames=("stage",)
)


def record_login_redirect() -> None:
    _LOGIN_REDIRECTS.inc()


def record_login_success() -> None:
    _LOGINS.inc()


def record_login_failure(stage: str) -> None:
    _LOGIN_FAILURES.labels(stage=stage).inc()
    logger.debug("oauth login failure recorded stage=%s", stage)

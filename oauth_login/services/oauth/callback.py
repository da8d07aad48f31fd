"""Provider callback validation."""
from __future__ import annotations

from collections.abc import Mapping

from .exceptions import CallbackFailure
from .models import CallbackResult


def parse_callback(query: Mapping[str, str]) -> CallbackResult:
    """
    Extract the authorization code from decoded callback query parameters.

    An ``error`` parameter always wins, even when a ``code`` accompanies it.
    The code is returned untouched.
    """
    if "error" in query:
        provider_error = query["error"]
        description = query.get("error_description")
        if description:
            provider_error = f"{provider_error}: {description}"
        return CallbackResult.failed(CallbackFailure.PROVIDER_ERROR, provider_error=provider_error)

    code = query.get("code")
    if not code:
        return CallbackResult.failed(CallbackFailure.MISSING_CODE)

    return CallbackResult.success(code)

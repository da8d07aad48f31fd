"""Client credential loading.

Credentials come from settings (environment / .env) first. Anything still
missing is looked up in a Java-style properties file when one is configured.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path

from oauth_login.core.config import BaseAppSettings

from .exceptions import ConfigurationError
from .models import ClientCredentials

logger = logging.getLogger(__name__)

CLIENT_ID_PROPERTY = "github.client.id"
CLIENT_SECRET_PROPERTY = "github.client.secret"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _logical_lines(text: str) -> Iterator[str]:
    """Join backslash-continued lines and drop blank and comment lines."""
    pending: str | None = None
    for raw_line in re.split(r"\r\n|\r|\n", text):
        line = raw_line.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue
        trailing_backslashes = len(line) - len(line.rstrip("\\"))
        if trailing_backslashes % 2 == 1:
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending is not None:
        yield pending


def _unescape(value: str) -> str:
    chars: list[str] = []
    i = 0
    while i < len(value):
        c = value[i]
        i += 1
        if c != "\\":
            chars.append(c)
            continue
        if i >= len(value):
            break
        c = value[i]
        i += 1
        if c == "u" and re.fullmatch(r"[0-9a-fA-F]{4}", value[i : i + 4]):
            chars.append(chr(int(value[i : i + 4], 16)))
            i += 4
        else:
            chars.append(_ESCAPES.get(c, c))
    return "".join(chars)


def _split_entry(line: str) -> tuple[str, str]:
    """Key ends at the first unescaped ``=``, ``:`` or whitespace."""
    end = 0
    while end < len(line):
        c = line[end]
        if c == "\\":
            end += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        end += 1
    end = min(end, len(line))

    start = end
    while start < len(line) and line[start] in _WHITESPACE:
        start += 1
    if start < len(line) and line[start] in _SEPARATORS:
        start += 1
    while start < len(line) and line[start] in _WHITESPACE:
        start += 1
    return _unescape(line[:end]), _unescape(line[start:])


def read_properties(path: str | Path) -> dict[str, str]:
    """
    Parse a Java ``.properties`` file.

    Follows ``java.util.Properties.load``: ``#``/``!`` comments, ``=``, ``:``
    or whitespace between key and value, backslash line continuations and
    escapes. A file that cannot be read is logged and yields no properties.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading properties from %s: %s", path, e)
        return {}

    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[key] = value
    return properties


def load_client_credentials(app_settings: BaseAppSettings) -> ClientCredentials:
    """
    Resolve the OAuth client id/secret.

    Raises:
        ConfigurationError: If either value is missing or empty
    """
    client_id = app_settings.GITHUB_CLIENT_ID
    client_secret = app_settings.GITHUB_CLIENT_SECRET

    if (not client_id or not client_secret) and app_settings.GITHUB_PROPERTIES_FILE:
        properties = read_properties(app_settings.GITHUB_PROPERTIES_FILE)
        client_id = client_id or properties.get(CLIENT_ID_PROPERTY, "").strip() or None
        client_secret = client_secret or properties.get(CLIENT_SECRET_PROPERTY, "").strip() or None

    if not client_id or not client_secret:
        source = app_settings.GITHUB_PROPERTIES_FILE or "GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET"
        raise ConfigurationError(f"GitHub client id/secret not configured - enter in {source}.")

    return ClientCredentials(client_id=client_id, client_secret=client_secret)

import json
import logging

import pytest

from oauth_login.core import config
from oauth_login.core.logger import HANDLER_NAME, JsonFormatter, init_logging


@pytest.fixture
def root_without_app_handler():
    """Temporarily remove the app's stdout handler so init_logging() installs a fresh one."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    package_logger = logging.getLogger("oauth_login")
    saved_package_level = package_logger.level
    root.handlers = [h for h in root.handlers if h.get_name() != HANDLER_NAME]
    yield root
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    package_logger.setLevel(saved_package_level)


def _app_handlers(root):
    return [h for h in root.handlers if h.get_name() == HANDLER_NAME]


def test_json_formatter_payload():
    record = logging.LogRecord("oauth_login.test", logging.WARNING, __file__, 1, "404 for %s", ("/x",), None)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "oauth_login.test"
    assert payload["message"] == "404 for /x"


def test_init_logging_installs_json_handler(root_without_app_handler):
    settings = config.ProdSettings(_env_file=None, LOG_LEVEL="DEBUG")

    init_logging(app_settings=settings)

    handlers = _app_handlers(root_without_app_handler)
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonFormatter)
    assert logging.getLogger("oauth_login").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_init_logging_is_idempotent(root_without_app_handler):
    settings = config.TestSettings(_env_file=None)

    init_logging(app_settings=settings)
    init_logging(app_settings=settings)

    assert len(_app_handlers(root_without_app_handler)) == 1

"""Run the login service: ``python -m oauth_login``."""
import logging

import uvicorn

from oauth_login.core.config import settings
from oauth_login.core.logger import init_logging

logger = logging.getLogger("oauth_login")


def main() -> None:
    init_logging()
    logger.info("Webserver listening on %s:%s", settings.HTTP_HOST, settings.HTTP_PORT)
    uvicorn.run(
        "oauth_login.api.main:app",
        host=settings.HTTP_HOST,
        port=settings.HTTP_PORT,
        proxy_headers=True,
        log_config=None,
    )


if __name__ == "__main__":
    main()

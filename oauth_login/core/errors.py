import logging
import uuid

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_404_NOT_FOUND, HTTP_405_METHOD_NOT_ALLOWED

logger = logging.getLogger("oauth_login.errors")

RESPONSE_BODY_404 = "404 - Not found."


def register_error_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (HTTP_404_NOT_FOUND, HTTP_405_METHOD_NOT_ALLOWED):
            logger.warning("404 for %s %s", request.method, request.url.path)
            return PlainTextResponse(RESPONSE_BODY_404, status_code=HTTP_404_NOT_FOUND)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):  # noqa: BLE001
        correlation_id = uuid.uuid4().hex
        logger.exception("Unhandled error cid=%s path=%s method=%s", correlation_id, request.url.path, request.method)
        return PlainTextResponse("Internal server error", status_code=500)

    return app

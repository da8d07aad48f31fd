import logging

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from oauth_login.api.routes_metrics import router as metrics_router
from oauth_login.api.routes_oauth import ROUTE_METHODS, oauth_callback
from oauth_login.api.routes_oauth import router as oauth_router
from oauth_login.core.config import BaseAppSettings, settings
from oauth_login.core.errors import register_error_handlers
from oauth_login.core.logger import init_logging
from oauth_login.services.oauth import create_oauth_flow

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, hsts_seconds: int, content_security_policy: str) -> None:
        super().__init__(app)
        self.hsts_seconds = hsts_seconds
        self.content_security_policy = content_security_policy

    async def dispatch(self, request, call_next):  # type: ignore[override]
        response = await call_next(request)
        response.headers.setdefault(
            "Strict-Transport-Security",
            f"max-age={self.hsts_seconds}; includeSubDomains",
        )
        response.headers.setdefault("Referrer-Policy", "same-origin")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Content-Security-Policy", self.content_security_policy)
        # Welcome pages carry personal data; never cache them
        response.headers.setdefault("Cache-Control", "no-store")
        return response


def create_app(app_settings: BaseAppSettings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    init_logging(app_settings=app_settings)

    is_production = app_settings.ENV.lower() == "prod"
    app = FastAPI(
        title=app_settings.APP_NAME,
        debug=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None if is_production else "/openapi.json",
    )
    app.state.settings = app_settings
    app.state.oauth_flow = create_oauth_flow(app_settings)

    if is_production:
        app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(
        SecurityHeadersMiddleware,
        hsts_seconds=app_settings.HSTS_SECONDS,
        content_security_policy=app_settings.CONTENT_SECURITY_POLICY,
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    register_error_handlers(app)

    app.include_router(oauth_router)
    app.add_api_route(
        app_settings.OAUTH_CALLBACK_PATH,
        oauth_callback,
        methods=ROUTE_METHODS,
        tags=["oauth"],
    )
    if app_settings.METRICS_ENABLED:
        app.include_router(metrics_router, tags=["metrics"])

    logger.info(
        "%s created (env=%s, oauth configured=%s)",
        app_settings.APP_NAME,
        app_settings.ENV,
        app.state.oauth_flow.is_configured,
    )
    return app


app = create_app()

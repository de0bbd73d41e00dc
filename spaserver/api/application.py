"""FastAPI application factory for the SPA server.

This module composes the API routes, the static file catch-all and the
optional middlewares into one ASGI application.
"""

from fastapi import FastAPI

from spaserver.config import SpaConfiguration
from spaserver.domain import RequestCounter

from .middleware import NoCacheMiddleware, RequestLoggingMiddleware
from .routers import api_create_health_router
from .static_files import SpaStaticFiles


def create_api_application(
    configuration: SpaConfiguration,
    request_counter: RequestCounter | None = None,
    request_logging_enabled: bool = False,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        configuration: Loaded server configuration.
        request_counter: Shared health call counter, a fresh one when omitted.
        request_logging_enabled: Install the request logging middleware.

    Returns:
        FastAPI: Application serving `/api/health` and the SPA files.

    Raises:
        RuntimeError: Raised when the static file directory does not exist.
    """

    # Interactive docs are disabled so `/docs` and friends stay SPA paths.
    application = FastAPI(title="SPA Server", docs_url=None, redoc_url=None, openapi_url=None)

    application.include_router(api_create_health_router(request_counter=request_counter or RequestCounter()))
    application.mount("/", SpaStaticFiles(directory=configuration.spa_dir, html=True), name="spa")

    # Starlette wraps in reverse order: the last middleware added runs first.
    if not configuration.http_cache_control:
        application.add_middleware(NoCacheMiddleware)
    if request_logging_enabled:
        application.add_middleware(RequestLoggingMiddleware)

    return application

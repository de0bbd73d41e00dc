"""API layer package for FastAPI application and route composition."""

from .application import create_api_application
from .middleware import NoCacheMiddleware, RequestLoggingMiddleware
from .static_files import SpaStaticFiles

__all__ = ["NoCacheMiddleware", "RequestLoggingMiddleware", "SpaStaticFiles", "create_api_application"]

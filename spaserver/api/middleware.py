"""ASGI request decorators installed around the SPA application.

Both middlewares are independent: one touches response headers only, the
other only emits a log line. Neither keeps state between requests.
"""

import logging

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


def api_request_uri(scope: Scope) -> str:
    """Rebuild the request URI (path and query string) from an ASGI scope.

    Args:
        scope: HTTP connection scope.

    Returns:
        str: Raw request target as sent by the client.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    raw_path = scope.get("raw_path") or scope.get("path", "/").encode("utf-8")
    uri = raw_path.decode("latin-1")
    query_string = scope.get("query_string", b"")
    if query_string:
        uri = f"{uri}?{query_string.decode('latin-1')}"
    return uri


class NoCacheMiddleware:
    """Add `Cache-Control: no-cache` to every HTTP response."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_without_cache(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.append("Cache-Control", "no-cache")
            await send(message)

        await self.app(scope, receive, send_without_cache)


class RequestLoggingMiddleware:
    """Log the URI of every HTTP request before it is handled."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            logger.info(api_request_uri(scope))
        await self.app(scope, receive, send)

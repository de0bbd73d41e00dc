"""Browser-side client calling the SPA server API and updating the page."""

from .alerts import ALERT_TYPES, show_alert
from .app import webclient_start
from .dom import DocumentPort, ElementPort, InMemoryDocument, InMemoryElement, webclient_get_element
from .errors import DecodeError, HttpStatusError, NetworkError, WebClientError
from .health_client import (
    HealthCallOutcome,
    api_fetch_health,
    api_get,
    api_get_health,
    webclient_render_health_outcome,
)

__all__ = [
    "ALERT_TYPES",
    "DecodeError",
    "DocumentPort",
    "ElementPort",
    "HealthCallOutcome",
    "HttpStatusError",
    "InMemoryDocument",
    "InMemoryElement",
    "NetworkError",
    "WebClientError",
    "api_fetch_health",
    "api_get",
    "api_get_health",
    "show_alert",
    "webclient_get_element",
    "webclient_render_health_outcome",
    "webclient_start",
]

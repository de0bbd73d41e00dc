"""Browser-side client for the `/api/health` endpoint.

Fetching and rendering are split: the detached task only produces a
`HealthCallOutcome`, and a completion callback renders it into the page.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx
from pydantic import TypeAdapter, ValidationError

from spaserver.domain import HealthReport

from .alerts import show_alert
from .dom import DocumentPort, webclient_get_element
from .errors import DecodeError, HttpStatusError, NetworkError, WebClientError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"
SERVER_MESSAGE_ELEMENT_ID = "servermessage"
CALL_API_ALERT_ELEMENT_ID = "msgcallapi"
STATUS_DEAD = "dead"

_HEALTH_REPORT_ADAPTER = TypeAdapter(HealthReport)
_PENDING_CALLS: set[asyncio.Task] = set()


@dataclass(frozen=True)
class HealthCallOutcome:
    """Result or error of one health call.

    Attributes:
        report: Decoded health report on success.
        error: Failure raised by the call, None on success.
        status_text: Status line of the successful response, e.g. `200 (OK)`.
    """

    report: HealthReport | None = None
    error: WebClientError | None = None
    status_text: str = ""

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.report is not None


async def api_get(client: httpx.AsyncClient, api_name: str) -> tuple[bytes, str]:
    """Call `GET /api/<api_name>` and return the raw body.

    Args:
        client: HTTP client bound to the page origin.
        api_name: API route name below `/api/`.

    Returns:
        tuple[bytes, str]: Response body and `<code> (<reason>)` status text.

    Raises:
        NetworkError: Raised when the request or body read fails.
        HttpStatusError: Raised when the server answers with a non-2xx status.
    """

    try:
        response = await client.get(API_PREFIX + api_name)
    except httpx.RequestError as error:
        logger.error("GET %s%s failed: %s", API_PREFIX, api_name, error)
        raise NetworkError(str(error) or error.__class__.__name__) from error

    if not response.is_success:
        logger.warning("GET %s%s answered %s", API_PREFIX, api_name, response.status_code)
        raise HttpStatusError(response.status_code, response.reason_phrase)

    return response.content, f"{response.status_code} ({response.reason_phrase})"


async def api_fetch_health(client: httpx.AsyncClient) -> HealthCallOutcome:
    """Fetch and decode the server health report.

    Args:
        client: HTTP client bound to the page origin.

    Returns:
        HealthCallOutcome: Decoded report or the captured failure.

    Raises:
        RuntimeError: Failures are returned in the outcome, not raised.
    """

    try:
        body, status_text = await api_get(client, "health")
    except WebClientError as error:
        return HealthCallOutcome(error=error)

    try:
        report = _HEALTH_REPORT_ADAPTER.validate_json(body)
    except ValidationError as error:
        return HealthCallOutcome(error=DecodeError(str(error)), status_text=status_text)
    return HealthCallOutcome(report=report, status_text=status_text)


def webclient_render_health_outcome(document: DocumentPort, outcome: HealthCallOutcome) -> None:
    """Render one health call outcome into the page.

    Args:
        document: Document holding the message and alert elements.
        outcome: Completed call outcome.

    Returns:
        None: The DOM is updated as a side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    message_element = webclient_get_element(document, SERVER_MESSAGE_ELEMENT_ID)

    if outcome.error is not None:
        show_alert(document, CALL_API_ALERT_ELEMENT_ID, str(outcome.error), outcome.error.alert_type)
        if message_element is not None:
            is_decode_error = isinstance(outcome.error, DecodeError)
            message_element.textContent = str(outcome.error) if is_decode_error else STATUS_DEAD
        return

    show_alert(document, CALL_API_ALERT_ELEMENT_ID, outcome.status_text, "alert-success")
    if message_element is not None:
        message_element.textContent = f"{outcome.report.health}, call counter: {outcome.report.counter}"


def _webclient_on_health_done(document: DocumentPort, task: asyncio.Task) -> None:
    _PENDING_CALLS.discard(task)
    if task.cancelled():
        logger.info("health call cancelled")
        return
    error = task.exception()
    if error is not None:
        logger.error("health call failed unexpectedly: %r", error)
        return
    webclient_render_health_outcome(document, task.result())


def api_get_health(document: DocumentPort, client: httpx.AsyncClient) -> asyncio.Task:
    """Start a detached health call that renders its outcome when done.

    Must be called with a running event loop; the caller is never blocked.

    Args:
        document: Document receiving the rendered outcome.
        client: HTTP client bound to the page origin.

    Returns:
        asyncio.Task: Task resolving to the `HealthCallOutcome`.

    Raises:
        RuntimeError: Raised when no event loop is running.
    """

    task = asyncio.get_running_loop().create_task(api_fetch_health(client))
    _PENDING_CALLS.add(task)
    task.add_done_callback(lambda done: _webclient_on_health_done(document, done))
    return task

"""Page entrypoint wiring the welcome banner and the API call button."""

import logging

import httpx

from .dom import DocumentPort, webclient_get_element
from .health_client import api_get_health

logger = logging.getLogger(__name__)

WELCOME_ELEMENT_ID = "welcome"
CALL_API_BUTTON_ID = "btncallapi"
HTML_SMILEY = '<i class="bi bi-emoji-smile"></i>'


def webclient_start(document: DocumentPort, client: httpx.AsyncClient) -> bool:
    """Render the welcome banner and bind the health button.

    Args:
        document: Page document.
        client: HTTP client bound to the page origin.

    Returns:
        bool: True when the call button was found and bound.

    Raises:
        RuntimeError: This function does not raise runtime errors.
    """

    logger.info("web client loaded")
    welcome_element = webclient_get_element(document, WELCOME_ELEMENT_ID)
    if welcome_element is not None:
        welcome_element.innerHTML = f"Welcome from the Python web client {HTML_SMILEY}"

    button = webclient_get_element(document, CALL_API_BUTTON_ID)
    if button is None:
        return False

    def _on_call_api_click(_event) -> None:
        logger.info("btncallapi clicked")
        api_get_health(document, client)

    button.onclick = _on_call_api_click
    logger.info("web client running")
    return True

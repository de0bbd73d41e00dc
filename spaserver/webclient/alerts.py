"""Bootstrap alert box rendering."""

import logging

from .dom import DocumentPort, webclient_get_element

logger = logging.getLogger(__name__)

ALERT_TYPES: tuple[str, ...] = (
    "alert-primary",
    "alert-secondary",
    "alert-success",
    "alert-danger",
    "alert-warning",
    "alert-info",
    "alert-light",
    "alert-dark",
)
VISIBILITY_CLASSES: tuple[str, ...] = ("d-none", "d-block")
VISIBLE_CLASS = "d-block"


def show_alert(document: DocumentPort, element_id: str, message: str, alert_type: str) -> bool:
    """Render a message into an alert element and restyle it.

    Every known alert type and both visibility classes are stripped first.
    A recognized `alert_type` is then appended together with `d-block`. An
    unrecognized type leaves the element stripped, i.e. hidden and unstyled.

    Args:
        document: Document holding the alert element.
        element_id: Alert element id.
        message: Text content to display.
        alert_type: One of `ALERT_TYPES`.

    Returns:
        bool: True when the alert was rendered with a recognized type.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    element = webclient_get_element(document, element_id)
    if element is None:
        return False

    element.textContent = message
    managed_classes = set(ALERT_TYPES) | set(VISIBILITY_CLASSES)
    kept_classes = [name for name in element.className.split() if name not in managed_classes]

    recognized = alert_type in ALERT_TYPES
    if recognized:
        kept_classes.extend((VISIBLE_CLASS, alert_type))
    else:
        logger.warning("unmanaged alert-type %r", alert_type)
    element.className = " ".join(kept_classes)
    return recognized

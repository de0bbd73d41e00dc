"""Document binding used by the browser client.

The ports mirror the subset of the browser DOM the client touches, using the
DOM's own attribute names so a Pyodide `js.document` satisfies them as is.
The in-memory implementation backs tests and headless rendering.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)


class ElementPort(Protocol):
    """Port definition for one DOM element."""

    id: str
    textContent: str
    innerHTML: str
    className: str
    onclick: Callable[[Any], Any] | None


class DocumentPort(Protocol):
    """Port definition for the DOM document lookup surface."""

    def getElementById(self, element_id: str) -> ElementPort | None:
        """Return the element carrying `element_id`, or None."""


class InMemoryElement:
    """Minimal DOM element holding text, markup, classes and a click handler."""

    def __init__(self, element_id: str, className: str = "", textContent: str = ""):
        self.id = element_id
        self.className = className
        self.textContent = textContent
        self.innerHTML = textContent
        self.onclick: Callable[[Any], Any] | None = None

    def click(self) -> Any:
        """Invoke the bound click handler, if any.

        Returns:
            Any: Handler return value, None without handler.

        Raises:
            Exception: Propagates handler exceptions.
        """

        if self.onclick is None:
            return None
        return self.onclick(None)

    def class_list(self) -> list[str]:
        return self.className.split()


class InMemoryDocument:
    """Document holding elements by id."""

    def __init__(self, elements: list[InMemoryElement] | None = None):
        self._elements = {element.id: element for element in elements or []}

    def getElementById(self, element_id: str) -> InMemoryElement | None:
        return self._elements.get(element_id)


def webclient_get_element(document: DocumentPort | None, element_id: str) -> ElementPort | None:
    """Look up one element and log when it is missing.

    Args:
        document: Document to search, None when no document is available.
        element_id: Element id attribute.

    Returns:
        ElementPort | None: Matching element or None.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    element = document.getElementById(element_id) if document is not None else None
    if element is None:
        logger.warning("unable to find html element id=%r", element_id)
    return element

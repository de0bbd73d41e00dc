"""Project-native typed exceptions for browser-side API calls."""

from __future__ import annotations


class WebClientError(Exception):
    """Base exception for browser-side API call failures.

    Attributes:
        alert_type: Bootstrap alert class used when rendering this failure.
    """

    alert_type = "alert-danger"


class NetworkError(WebClientError, ConnectionError):
    """Transport-level failure while calling or reading from the server."""


class HttpStatusError(WebClientError):
    """Server answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code.
        reason_phrase: Standard reason phrase for the status code.
    """

    alert_type = "alert-warning"

    def __init__(self, status_code: int, reason_phrase: str):
        super().__init__(f"{status_code} ({reason_phrase})")
        self.status_code = status_code
        self.reason_phrase = reason_phrase


class DecodeError(WebClientError, ValueError):
    """Response body does not match the expected JSON contract."""

"""Typed domain models shared by the server and the browser client.

This module provides the health wire contract and the process-wide request
counter observed through it.
"""

import threading
from dataclasses import dataclass

HEALTH_LIVE = "live"


@dataclass(frozen=True)
class HealthReport:
    """Health response contract exchanged over `/api/health`.

    Attributes:
        health: Liveness text, `live` while the server answers.
        counter: Decimal call count rendered as a string.
    """

    health: str
    counter: str


class RequestCounter:
    """Thread-safe monotonically increasing call counter."""

    def __init__(self, initial_value: int = 0):
        """Initialize the counter.

        Args:
            initial_value: Starting value, zero for a fresh process.

        Raises:
            ValueError: Raised when initial value is negative.
        """

        if initial_value < 0:
            raise ValueError("initial_value must be >= 0")
        self._value = initial_value
        self._lock = threading.Lock()

    def counter_increment(self) -> int:
        """Increment the counter by one.

        Returns:
            int: Counter value after this increment.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        with self._lock:
            self._value += 1
            return self._value

    def counter_value(self) -> int:
        """Return the current counter value.

        Returns:
            int: Current value.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        with self._lock:
            return self._value

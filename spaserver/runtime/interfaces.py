"""Typed interfaces and value objects for the server lifecycle."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from fastapi import FastAPI

from spaserver.config import SpaConfiguration


class LifecycleState(str, Enum):
    """Server lifecycle states in transition order."""

    IDLE = "idle"
    STARTING = "starting"
    SERVING = "serving"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class LifecycleStateError(RuntimeError):
    """Raised when a lifecycle operation is invoked from the wrong state."""


@dataclass(frozen=True)
class ShutdownTrigger:
    """One event delivered on the shutdown-trigger channel.

    Attributes:
        reason: Human-readable trigger origin (`SIGTERM`, `bind failure`, ...).
        startup_failed: True when the server never started serving.
        serving_failed: True when the server stopped without being asked to.
    """

    reason: str
    startup_failed: bool = False
    serving_failed: bool = False


@dataclass(frozen=True)
class LifecycleOutcome:
    """Final result of one serve-until-signaled run.

    Attributes:
        trigger: Trigger that ended serving.
        drained: False when in-flight work was abandoned at the deadline.
    """

    trigger: ShutdownTrigger
    drained: bool

    @property
    def exit_code(self) -> int:
        """Return the process exit status for this outcome.

        Returns:
            int: `1` when startup failed or serving stopped unexpectedly, `0` otherwise.

        Raises:
            RuntimeError: This property does not raise runtime errors.
        """

        return 1 if self.trigger.startup_failed or self.trigger.serving_failed else 0


class ServerPort(Protocol):
    """Port definition for a blocking HTTP server driven from a thread."""

    started: bool
    should_exit: bool
    force_exit: bool

    def run(self) -> None:
        """Bind, serve until `should_exit` is set, then drain and return.

        Returns:
            None: Returns once the server has stopped.

        Raises:
            SystemExit: Raised when the listen socket cannot be bound.
        """


ServerFactory = Callable[[FastAPI, SpaConfiguration, Callable[[], None]], ServerPort]

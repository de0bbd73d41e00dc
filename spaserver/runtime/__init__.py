"""Runtime package for server lifecycle and shutdown coordination."""

from .interfaces import (
    LifecycleOutcome,
    LifecycleState,
    LifecycleStateError,
    ServerFactory,
    ServerPort,
    ShutdownTrigger,
)
from .lifecycle import ServerLifecycle, runtime_create_uvicorn_server, runtime_shutdown_signals

__all__ = [
    "LifecycleOutcome",
    "LifecycleState",
    "LifecycleStateError",
    "ServerFactory",
    "ServerLifecycle",
    "ServerPort",
    "ShutdownTrigger",
    "runtime_create_uvicorn_server",
    "runtime_shutdown_signals",
]

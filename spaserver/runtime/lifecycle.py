"""Serve-until-signaled lifecycle around a uvicorn server.

The HTTP server runs on a background thread. The calling thread blocks on a
shutdown-trigger channel fed by OS signal handlers, explicit shutdown
requests and startup failures, then asks the server to drain within the
configured deadline.
"""

from __future__ import annotations

import logging
import queue
import signal
import threading
from typing import Callable

import uvicorn
from fastapi import FastAPI

from spaserver.config import SpaConfiguration

from .interfaces import (
    LifecycleOutcome,
    LifecycleState,
    LifecycleStateError,
    ServerFactory,
    ServerPort,
    ShutdownTrigger,
)

logger = logging.getLogger(__name__)

TRIGGER_POLL_SECONDS = 0.5


class _NotifyingUvicornServer(uvicorn.Server):
    """uvicorn server reporting the moment its listeners are up."""

    def __init__(self, config: uvicorn.Config, on_started: Callable[[], None]):
        super().__init__(config=config)
        self._on_started = on_started

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            self._on_started()


def runtime_create_uvicorn_server(
    application: FastAPI,
    configuration: SpaConfiguration,
    on_started: Callable[[], None],
) -> ServerPort:
    """Build the uvicorn server with the configured address and timeouts.

    Args:
        application: ASGI application to serve.
        configuration: Loaded server configuration.
        on_started: Callback invoked from the server thread once listening.

    Returns:
        ServerPort: Unstarted uvicorn server.

    Raises:
        RuntimeError: Raised if uvicorn rejects the configuration.
    """

    host, port = configuration.config_bind_address()
    config = uvicorn.Config(
        application,
        host=host,
        port=port,
        timeout_keep_alive=configuration.http_idle_timeout_seconds,
        timeout_graceful_shutdown=int(configuration.config_shutdown_deadline_seconds()),
    )
    return _NotifyingUvicornServer(config=config, on_started=on_started)


def runtime_shutdown_signals() -> tuple[signal.Signals, ...]:
    """Return the catchable termination signals available on this platform.

    Returns:
        tuple[signal.Signals, ...]: Interrupt, termination and quit signals.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    names = ("SIGINT", "SIGTERM", "SIGQUIT")
    return tuple(getattr(signal, name) for name in names if hasattr(signal, name))


class ServerLifecycle:
    """State machine driving one server from construction to shutdown.

    States move `IDLE -> STARTING -> SERVING -> SHUTTING_DOWN -> STOPPED`.
    A startup failure jumps from `STARTING` straight to `STOPPED`.
    """

    def __init__(
        self,
        application: FastAPI,
        configuration: SpaConfiguration,
        server_factory: ServerFactory | None = None,
        install_signal_handlers: bool = True,
    ):
        """Initialize the lifecycle.

        Args:
            application: ASGI application to serve.
            configuration: Loaded server configuration.
            server_factory: Server builder, uvicorn when omitted.
            install_signal_handlers: Route OS termination signals to shutdown.

        Raises:
            ValueError: Raised when application or configuration is None.
        """

        if application is None:
            raise ValueError("application must not be None")
        if configuration is None:
            raise ValueError("configuration must not be None")
        self._application = application
        self._configuration = configuration
        self._server_factory = server_factory or runtime_create_uvicorn_server
        self._install_signal_handlers = install_signal_handlers
        self._triggers: queue.SimpleQueue[ShutdownTrigger] = queue.SimpleQueue()
        self._state = LifecycleState.IDLE
        self._state_lock = threading.Lock()
        self._server: ServerPort | None = None
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> LifecycleState:
        """Return the current lifecycle state."""

        with self._state_lock:
            return self._state

    def _lifecycle_transition(self, expected: tuple[LifecycleState, ...], target: LifecycleState) -> bool:
        with self._state_lock:
            if self._state not in expected:
                return False
            logger.debug("server lifecycle %s -> %s", self._state.value, target.value)
            self._state = target
            return True

    def _lifecycle_mark_serving(self) -> None:
        if self._lifecycle_transition((LifecycleState.STARTING,), LifecycleState.SERVING):
            host, port = self._configuration.config_bind_address()
            logger.info("SPA web server listening on %s:%s", host, port)

    def _lifecycle_serve(self) -> None:
        server = self._server
        try:
            server.run()
        except SystemExit as error:
            logger.error("SPA web server stopped serving: exit status %s", error.code)
        except Exception:
            logger.exception("SPA web server crashed while serving")
        finally:
            if not server.started:
                self.lifecycle_request_shutdown("bind failure", startup_failed=True)
            elif self.state == LifecycleState.SERVING:
                self.lifecycle_request_shutdown("server stopped unexpectedly", serving_failed=True)

    def lifecycle_request_shutdown(
        self,
        reason: str,
        startup_failed: bool = False,
        serving_failed: bool = False,
    ) -> None:
        """Push one trigger onto the shutdown channel.

        Safe to call from signal handlers and from other threads.

        Args:
            reason: Trigger origin used in logs.
            startup_failed: Mark the trigger as a startup failure.
            serving_failed: Mark the trigger as an unrequested stop while serving.

        Returns:
            None: The trigger is queued as a side effect.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        self._triggers.put(
            ShutdownTrigger(reason=reason, startup_failed=startup_failed, serving_failed=serving_failed)
        )

    def lifecycle_start(self) -> None:
        """Build the server and start serving on a background thread.

        Returns:
            None: Serving continues on the background thread.

        Raises:
            LifecycleStateError: Raised when the lifecycle is not idle.
        """

        if not self._lifecycle_transition((LifecycleState.IDLE,), LifecycleState.STARTING):
            raise LifecycleStateError(f"cannot start server from state {self.state.value!r}")

        self._server = self._server_factory(self._application, self._configuration, self._lifecycle_mark_serving)
        self._thread = threading.Thread(target=self._lifecycle_serve, name="spa-server", daemon=True)
        self._thread.start()

    def lifecycle_wait_for_trigger(self) -> ShutdownTrigger:
        """Block until a shutdown trigger arrives.

        Returns:
            ShutdownTrigger: First trigger delivered on the channel.

        Raises:
            LifecycleStateError: Raised when the server was never started.
        """

        if self.state == LifecycleState.IDLE:
            raise LifecycleStateError("cannot wait for shutdown before the server is started")

        # Short timeouts keep the wait interruptible on every platform.
        while True:
            try:
                return self._triggers.get(timeout=TRIGGER_POLL_SECONDS)
            except queue.Empty:
                continue

    def lifecycle_shutdown(self, trigger: ShutdownTrigger) -> LifecycleOutcome:
        """Drain the server within the deadline and stop.

        Args:
            trigger: Trigger that ended serving.

        Returns:
            LifecycleOutcome: Trigger and whether in-flight work drained.

        Raises:
            LifecycleStateError: Raised when the server was never started.
        """

        if trigger.startup_failed:
            self._lifecycle_transition((LifecycleState.STARTING, LifecycleState.SERVING), LifecycleState.STOPPED)
            logger.error("SPA web server failed to start on %s", self._configuration.http_port)
            return LifecycleOutcome(trigger=trigger, drained=True)

        if not self._lifecycle_transition(
            (LifecycleState.STARTING, LifecycleState.SERVING),
            LifecycleState.SHUTTING_DOWN,
        ):
            raise LifecycleStateError(f"cannot shut down server from state {self.state.value!r}")

        deadline_seconds = self._configuration.config_shutdown_deadline_seconds()
        logger.info("shutdown requested (%s), draining for up to %.0fs", trigger.reason, deadline_seconds)
        self._server.should_exit = True
        self._thread.join(timeout=deadline_seconds)

        drained = not self._thread.is_alive()
        if not drained:
            logger.warning("shutdown deadline exceeded, abandoning open connections")
            self._server.force_exit = True

        if trigger.serving_failed:
            logger.error("SPA web server stopped serving without a shutdown request")
        self._lifecycle_transition((LifecycleState.SHUTTING_DOWN,), LifecycleState.STOPPED)
        logger.info("server lifecycle stopped")
        return LifecycleOutcome(trigger=trigger, drained=drained)

    def _lifecycle_install_signal_handlers(self) -> dict[signal.Signals, object]:
        if not self._install_signal_handlers or threading.current_thread() is not threading.main_thread():
            return {}

        def _handle_signal(signum: int, _frame) -> None:
            self.lifecycle_request_shutdown(signal.Signals(signum).name)

        previous_handlers = {}
        for signum in runtime_shutdown_signals():
            previous_handlers[signum] = signal.signal(signum, _handle_signal)
        return previous_handlers

    def lifecycle_run(self) -> LifecycleOutcome:
        """Start serving, block until signaled, then shut down gracefully.

        SIGKILL cannot be caught and bypasses this sequence.

        Returns:
            LifecycleOutcome: Trigger and drain result for exit code mapping.

        Raises:
            LifecycleStateError: Raised when the lifecycle is not idle.
        """

        previous_handlers = self._lifecycle_install_signal_handlers()
        try:
            self.lifecycle_start()
            trigger = self.lifecycle_wait_for_trigger()
            return self.lifecycle_shutdown(trigger)
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)

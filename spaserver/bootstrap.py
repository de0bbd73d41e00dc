"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from spaserver.api import create_api_application
from spaserver.config import SpaConfiguration, config_load_configuration, config_load_runtime_settings
from spaserver.domain import RequestCounter
from spaserver.runtime import ServerFactory, ServerLifecycle


def bootstrap_load_configuration() -> SpaConfiguration:
    """Resolve the configuration for the environment selected by `SPA_ENV`.

    Returns:
        SpaConfiguration: Validated configuration.

    Raises:
        ConfigError: Raised when settings or the configuration file are invalid.
    """

    runtime_settings = config_load_runtime_settings()
    return config_load_configuration(runtime_settings.env, system_config_dir=runtime_settings.config_dir)


def bootstrap_create_application(
    configuration: SpaConfiguration,
    request_logging_enabled: bool = False,
) -> FastAPI:
    """Assemble the ASGI application with a fresh request counter.

    Args:
        configuration: Validated configuration.
        request_logging_enabled: Install the request logging middleware.

    Returns:
        FastAPI: Fully initialized application instance.

    Raises:
        RuntimeError: Raised when the static file directory does not exist.
    """

    return create_api_application(
        configuration=configuration,
        request_counter=RequestCounter(),
        request_logging_enabled=request_logging_enabled,
    )


def bootstrap_create_lifecycle(
    configuration: SpaConfiguration,
    request_logging_enabled: bool = False,
    server_factory: ServerFactory | None = None,
) -> ServerLifecycle:
    """Build the server lifecycle around a freshly assembled application.

    Args:
        configuration: Validated configuration.
        request_logging_enabled: Install the request logging middleware.
        server_factory: Optional server builder override.

    Returns:
        ServerLifecycle: Idle lifecycle ready to run.

    Raises:
        RuntimeError: Raised when the static file directory does not exist.
    """

    application = bootstrap_create_application(configuration, request_logging_enabled=request_logging_enabled)
    return ServerLifecycle(application=application, configuration=configuration, server_factory=server_factory)

"""Typed runtime settings and the file-backed server configuration contract."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_SYSTEM_CONFIG_DIR = "/etc/spa/"
SHUTDOWN_GRACE_SECONDS = 10


class RuntimeSettings(BaseSettings):
    """Process settings read from environment variables and dotenv.

    Environment variable names are the field names prefixed with `SPA_`.
    Example: `env` reads from `SPA_ENV`.

    Attributes:
        env: Requested environment name, normalized later by the resolver.
        config_dir: System configuration directory searched as fallback.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    env: str = Field(default="")
    config_dir: str = Field(default=DEFAULT_SYSTEM_CONFIG_DIR, min_length=1)


class SpaConfiguration(BaseModel):
    """Server configuration loaded from one `config.<env>.toml` file.

    Field aliases are the TOML keys; every aliased key is required.

    Attributes:
        environment: Normalized environment label (`dev`, `prod`, ...).
        spa_dir: Absolute directory holding the SPA files to serve.
        http_port: Listen address in `host:port` or `:port` form.
        http_rw_timeout_seconds: Read and write timeout in seconds.
        http_idle_timeout_seconds: Keep-alive idle timeout in seconds.
        http_cache_control: Keep client caching; `False` injects `no-cache`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    environment: str = Field(default=DEFAULT_ENVIRONMENT)
    spa_dir: Path = Field(alias="spafiledir")
    http_port: str
    http_rw_timeout_seconds: int = Field(alias="http_rwTimeout", ge=0)
    http_idle_timeout_seconds: int = Field(alias="http_idleTimeout", ge=0)
    http_cache_control: bool = Field(alias="http_cache-control")

    @field_validator("http_port")
    @classmethod
    def _validate_http_port(cls, value: str) -> str:
        stripped_value = value.strip()
        host, separator, port = stripped_value.rpartition(":")
        if not separator:
            raise ValueError("http_port must use `host:port` or `:port` form")
        if host.startswith("[") != host.endswith("]"):
            raise ValueError("http_port IPv6 host must be enclosed in brackets")
        if not port.isdigit() or not 1 <= int(port) <= 65535:
            raise ValueError("http_port must end with a port number between 1 and 65535")
        return stripped_value

    def config_bind_address(self) -> tuple[str, int]:
        """Split the configured listen address into host and port.

        Returns:
            tuple[str, int]: Bind host (`0.0.0.0` when omitted, IPv6 brackets removed) and port.

        Raises:
            ValueError: Never raised for validated configurations.
        """

        host, _, port = self.http_port.rpartition(":")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        return (host or "0.0.0.0", int(port))

    def config_shutdown_deadline_seconds(self) -> float:
        """Return the graceful shutdown deadline.

        Returns:
            float: Read/write timeout plus a fixed grace period, in seconds.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return float(self.http_rw_timeout_seconds + SHUTDOWN_GRACE_SECONDS)


def config_load_runtime_settings() -> RuntimeSettings:
    """Load process settings from environment and dotenv.

    Returns:
        RuntimeSettings: Validated runtime settings object.

    Raises:
        ConfigError: Raised when environment values are invalid.
    """

    try:
        return RuntimeSettings()
    except ValidationError as error:
        raise ConfigError(f"Runtime settings validation failed. Check SPA_* variables. Details: {error}") from error

"""Environment-specific configuration file resolution.

The resolver looks for `config.<environment>.toml` inside the `configs`
subdirectory of the working directory first and falls back to the system
configuration directory. The static file root read from the file is
normalized to an absolute path before the configuration is returned.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from .errors import ConfigFileNotFoundError, ConfigParseError, ConfigPathResolutionError
from .settings import DEFAULT_ENVIRONMENT, DEFAULT_SYSTEM_CONFIG_DIR, SpaConfiguration

logger = logging.getLogger(__name__)

LOCAL_CONFIG_SUBDIR = "configs"


def config_normalize_environment(environment_name: str | None) -> str:
    """Normalize a requested environment name.

    Args:
        environment_name: Raw environment name, usually from `SPA_ENV`.

    Returns:
        str: Trimmed lowercase name, `dev` when empty.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    normalized_name = (environment_name or "").strip().lower()
    return normalized_name or DEFAULT_ENVIRONMENT


def config_candidate_paths(
    environment: str,
    working_dir: Path,
    system_config_dir: str | Path,
) -> tuple[Path, Path]:
    """Return configuration file candidates in search order.

    Args:
        environment: Normalized environment name.
        working_dir: Directory holding the local `configs` subdirectory.
        system_config_dir: Fallback system configuration directory.

    Returns:
        tuple[Path, Path]: Local candidate first, system candidate second.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    file_name = f"config.{environment}.toml"
    return (
        working_dir / LOCAL_CONFIG_SUBDIR / file_name,
        Path(system_config_dir) / file_name,
    )


def _config_read_first_available(environment: str, candidates: tuple[Path, ...]) -> tuple[Path, bytes]:
    for candidate in candidates:
        try:
            return candidate, candidate.read_bytes()
        except OSError as error:
            logger.debug("LoadConfiguration: unable to read %s: %s", candidate, error)

    searched = ", ".join(str(candidate) for candidate in candidates)
    raise ConfigFileNotFoundError(
        f"No configuration file found for environment {environment!r}. Searched: {searched}",
        environment=environment,
        searched_paths=candidates,
    )


def _config_resolve_spa_dir(environment: str, spa_dir: Path, working_dir: Path) -> Path:
    try:
        return (working_dir / spa_dir.expanduser()).resolve()
    except (OSError, RuntimeError) as error:
        raise ConfigPathResolutionError(
            f"Unable to resolve static file directory {str(spa_dir)!r}: {error}",
            environment=environment,
        ) from error


def config_load_configuration(
    environment_name: str | None,
    working_dir: str | Path | None = None,
    system_config_dir: str | Path = DEFAULT_SYSTEM_CONFIG_DIR,
) -> SpaConfiguration:
    """Load the server configuration for one environment.

    Args:
        environment_name: Requested environment name; blank selects `dev`.
        working_dir: Base directory for the local search and relative paths.
            Defaults to the current working directory.
        system_config_dir: Fallback directory searched after the local one.

    Returns:
        SpaConfiguration: Validated configuration with an absolute `spa_dir`.

    Raises:
        ConfigFileNotFoundError: Raised when no candidate file can be read.
        ConfigParseError: Raised when content is not valid TOML or misses keys.
        ConfigPathResolutionError: Raised when `spafiledir` cannot be resolved.
    """

    environment = config_normalize_environment(environment_name)
    try:
        base_dir = Path(working_dir) if working_dir is not None else Path.cwd()
    except OSError as error:
        raise ConfigPathResolutionError(
            f"Unable to determine working directory: {error}",
            environment=environment,
        ) from error

    candidates = config_candidate_paths(environment, base_dir, system_config_dir)
    config_path, raw_content = _config_read_first_available(environment, candidates)

    try:
        decoded_content = tomllib.loads(raw_content.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as error:
        raise ConfigParseError(
            f"Configuration file {config_path} is not valid TOML: {error}",
            environment=environment,
        ) from error

    try:
        configuration = SpaConfiguration.model_validate({**decoded_content, "environment": environment})
    except ValidationError as error:
        raise ConfigParseError(
            f"Configuration file {config_path} failed validation. Details: {error}",
            environment=environment,
        ) from error

    spa_dir = _config_resolve_spa_dir(environment, configuration.spa_dir, base_dir)
    logger.debug("LoadConfiguration: loaded %s, serving %s", config_path, spa_dir)
    return configuration.model_copy(update={"spa_dir": spa_dir})

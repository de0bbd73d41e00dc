"""Configuration package for runtime settings and config file resolution."""

from .errors import ConfigError, ConfigFileNotFoundError, ConfigParseError, ConfigPathResolutionError
from .resolver import config_candidate_paths, config_load_configuration, config_normalize_environment
from .settings import RuntimeSettings, SpaConfiguration, config_load_runtime_settings

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigPathResolutionError",
    "RuntimeSettings",
    "SpaConfiguration",
    "config_candidate_paths",
    "config_load_configuration",
    "config_load_runtime_settings",
    "config_normalize_environment",
]

"""Project-native typed exceptions for configuration loading failures."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Base exception for configuration resolution failures.

    Attributes:
        environment: Normalized environment name the load was attempted for.
    """

    def __init__(self, message: str, environment: str | None = None):
        super().__init__(message)
        self.environment = environment


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """No configuration file exists in any searched location.

    Attributes:
        searched_paths: Candidate file paths in search order.
    """

    def __init__(
        self,
        message: str,
        environment: str | None = None,
        searched_paths: tuple[Path, ...] = (),
    ):
        super().__init__(message=message, environment=environment)
        self.searched_paths = searched_paths


class ConfigParseError(ConfigError, ValueError):
    """Configuration file content is malformed or misses required keys."""


class ConfigPathResolutionError(ConfigError, OSError):
    """Static file root cannot be resolved to an absolute path."""

"""Tests for environment configuration file resolution.

These tests validate environment normalization, the two-location search
order, error mapping and static root normalization.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from spaserver.config import (
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigPathResolutionError,
    config_candidate_paths,
    config_load_configuration,
    config_normalize_environment,
)
import spaserver.config.resolver as resolver_module

_VALID_CONTENT = """
spafiledir = "./webapp"
http_port = ":5500"
http_rwTimeout = 5
http_idleTimeout = 15
http_cache-control = false
"""


def _write_config(directory: Path, environment: str, content: str = _VALID_CONTENT) -> Path:
    """Write one configuration file under `directory`.

    Args:
        directory: Target directory, created when missing.
        environment: Environment name used in the file name.
        content: TOML content.

    Returns:
        Path: Written file path.

    Raises:
        OSError: Raised when the file cannot be written.
    """

    directory.mkdir(parents=True, exist_ok=True)
    config_path = directory / f"config.{environment}.toml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


@pytest.mark.parametrize("raw_name", ["Dev", " dev ", "", "  ", "DEV", None])
def test_config_normalize_environment_defaults_to_dev(raw_name: str | None) -> None:
    """Normalize case, whitespace and blank names to `dev`.

    Args:
        raw_name: Raw environment name.

    Returns:
        None: Assertions validate normalization.

    Raises:
        AssertionError: Raised when normalization is incorrect.
    """

    assert config_normalize_environment(raw_name) == "dev"


@pytest.mark.parametrize("raw_name", ["Dev", " dev ", ""])
def test_config_load_reads_dev_file_for_name_variants(tmp_path: Path, raw_name: str) -> None:
    """Load `config.dev.toml` for every variant of the dev environment name.

    Args:
        tmp_path: Pytest temporary directory fixture.
        raw_name: Raw environment name.

    Returns:
        None: Assertions validate loaded values.

    Raises:
        AssertionError: Raised when the dev file is not loaded.
    """

    _write_config(tmp_path / "configs", "dev")

    configuration = config_load_configuration(raw_name, working_dir=tmp_path, system_config_dir=tmp_path / "etc")

    assert configuration.environment == "dev"
    assert configuration.http_port == ":5500"
    assert configuration.http_rw_timeout_seconds == 5
    assert configuration.http_idle_timeout_seconds == 15
    assert configuration.http_cache_control is False


def test_config_load_falls_back_to_system_directory(tmp_path: Path) -> None:
    """Load from the system directory when the local file is missing.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate fallback behavior.

    Raises:
        AssertionError: Raised when fallback is not used.
    """

    system_dir = tmp_path / "etc" / "spa"
    _write_config(system_dir, "prod", _VALID_CONTENT.replace(":5500", ":8080"))

    configuration = config_load_configuration("PROD", working_dir=tmp_path / "app", system_config_dir=system_dir)

    assert configuration.environment == "prod"
    assert configuration.http_port == ":8080"


def test_config_load_prefers_local_directory(tmp_path: Path) -> None:
    """Use the local `configs` file when both locations provide one.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate search order.

    Raises:
        AssertionError: Raised when the system file wins.
    """

    system_dir = tmp_path / "etc"
    _write_config(tmp_path / "configs", "dev", _VALID_CONTENT.replace(":5500", ":1111"))
    _write_config(system_dir, "dev", _VALID_CONTENT.replace(":5500", ":2222"))

    configuration = config_load_configuration("dev", working_dir=tmp_path, system_config_dir=system_dir)

    assert configuration.http_port == ":1111"


def test_config_load_raises_not_found_when_no_location_has_file(tmp_path: Path) -> None:
    """Raise `ConfigFileNotFoundError` listing both searched paths.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate error mapping.

    Raises:
        AssertionError: Raised when error mapping is incorrect.
    """

    system_dir = tmp_path / "etc"

    with pytest.raises(ConfigFileNotFoundError) as error_info:
        config_load_configuration("staging", working_dir=tmp_path, system_config_dir=system_dir)

    assert error_info.value.environment == "staging"
    assert error_info.value.searched_paths == config_candidate_paths("staging", tmp_path, system_dir)
    assert isinstance(error_info.value, FileNotFoundError)


def test_config_load_raises_parse_error_for_malformed_toml(tmp_path: Path) -> None:
    """Raise `ConfigParseError` when the file is not valid TOML.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate error mapping.

    Raises:
        AssertionError: Raised when error mapping is incorrect.
    """

    _write_config(tmp_path / "configs", "dev", 'spafiledir = "./webapp\nhttp_port = ')

    with pytest.raises(ConfigParseError, match="not valid TOML"):
        config_load_configuration("dev", working_dir=tmp_path, system_config_dir=tmp_path / "etc")


def test_config_load_raises_parse_error_for_missing_key(tmp_path: Path) -> None:
    """Fail fast when a required key is absent.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate required key handling.

    Raises:
        AssertionError: Raised when a missing key is accepted.
    """

    _write_config(tmp_path / "configs", "dev", _VALID_CONTENT.replace("http_rwTimeout = 5\n", ""))

    with pytest.raises(ConfigParseError, match="http_rwTimeout"):
        config_load_configuration("dev", working_dir=tmp_path, system_config_dir=tmp_path / "etc")


def test_config_load_raises_parse_error_for_invalid_port(tmp_path: Path) -> None:
    """Reject listen addresses without a usable port.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate port validation.

    Raises:
        AssertionError: Raised when an invalid port is accepted.
    """

    _write_config(tmp_path / "configs", "dev", _VALID_CONTENT.replace('":5500"', '"5500"'))

    with pytest.raises(ConfigParseError, match="http_port"):
        config_load_configuration("dev", working_dir=tmp_path, system_config_dir=tmp_path / "etc")


@pytest.mark.parametrize("spa_dir", ["./webapp", "webapp", "../public", ".", "nested/dist/"])
def test_config_load_resolves_spa_dir_to_absolute_path(tmp_path: Path, spa_dir: str) -> None:
    """Resolve every relative static root against the working directory.

    Args:
        tmp_path: Pytest temporary directory fixture.
        spa_dir: Relative static root written to the file.

    Returns:
        None: Assertions validate path normalization.

    Raises:
        AssertionError: Raised when the static root is not absolute.
    """

    working_dir = tmp_path / "app"
    _write_config(working_dir / "configs", "dev", _VALID_CONTENT.replace('"./webapp"', f'"{spa_dir}"'))

    configuration = config_load_configuration("dev", working_dir=working_dir, system_config_dir=tmp_path / "etc")

    assert configuration.spa_dir.is_absolute()
    assert configuration.spa_dir == (working_dir / spa_dir).resolve()


def test_config_load_uses_current_directory_by_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Search `./configs` of the process working directory when none is given.

    Args:
        tmp_path: Pytest temporary directory fixture.
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate default working directory handling.

    Raises:
        AssertionError: Raised when the current directory is not used.
    """

    _write_config(tmp_path / "configs", "dev")
    monkeypatch.chdir(tmp_path)

    configuration = config_load_configuration("", system_config_dir=tmp_path / "etc")

    assert configuration.spa_dir == (tmp_path / "webapp").resolve()


def test_config_load_raises_path_resolution_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Map static root resolution failures to `ConfigPathResolutionError`.

    Args:
        tmp_path: Pytest temporary directory fixture.
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate error mapping.

    Raises:
        AssertionError: Raised when error mapping is incorrect.
    """

    _write_config(tmp_path / "configs", "dev")

    def _raise_resolve(_self: Path, strict: bool = False) -> Path:
        _ = strict
        raise OSError("symlink loop")

    monkeypatch.setattr(resolver_module.Path, "resolve", _raise_resolve)

    with pytest.raises(ConfigPathResolutionError, match="symlink loop"):
        config_load_configuration("dev", working_dir=tmp_path, system_config_dir=tmp_path / "etc")


def test_config_bind_address_and_shutdown_deadline(tmp_path: Path) -> None:
    """Derive bind host, port and shutdown deadline from loaded values.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate derived helpers.

    Raises:
        AssertionError: Raised when derived values are incorrect.
    """

    _write_config(tmp_path / "configs", "dev")
    _write_config(tmp_path / "configs", "local", _VALID_CONTENT.replace('":5500"', '"127.0.0.1:9000"'))

    dev_configuration = config_load_configuration("dev", working_dir=tmp_path, system_config_dir=tmp_path / "etc")
    local_configuration = config_load_configuration("local", working_dir=tmp_path, system_config_dir=tmp_path / "etc")

    assert dev_configuration.config_bind_address() == ("0.0.0.0", 5500)
    assert local_configuration.config_bind_address() == ("127.0.0.1", 9000)
    assert dev_configuration.config_shutdown_deadline_seconds() == 15.0

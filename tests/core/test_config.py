"""Tests for environment-driven extensions configuration."""

from pathlib import Path

import pytest

from pact_cli.core.config import (
    DEFAULT_HTTP_TIMEOUT,
    EXTENSIONS_HOME_ENV,
    HTTP_TIMEOUT_ENV,
    load_extensions_config,
)


def test_defaults_to_pact_extensions_under_home() -> None:
    config = load_extensions_config({})

    assert config.extensions_home == Path.home() / ".pact" / "extensions"
    assert config.http_timeout == DEFAULT_HTTP_TIMEOUT


def test_paths_derive_from_extensions_home(tmp_path: Path) -> None:
    config = load_extensions_config({EXTENSIONS_HOME_ENV: str(tmp_path)})

    assert config.bin_dir == tmp_path / "bin"
    assert config.registry_path == tmp_path / "config.json"
    assert config.legacy_dir == tmp_path / "pact-legacy"


def test_timeout_override() -> None:
    config = load_extensions_config({HTTP_TIMEOUT_ENV: "2.5"})

    assert config.http_timeout == 2.5


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_invalid_timeout_is_rejected(value: str) -> None:
    with pytest.raises(ValueError, match=HTTP_TIMEOUT_ENV):
        load_extensions_config({HTTP_TIMEOUT_ENV: value})


def test_relative_extensions_home_is_made_absolute(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    config = load_extensions_config({EXTENSIONS_HOME_ENV: "ext"})

    assert config.extensions_home.is_absolute()
    assert config.extensions_home == tmp_path.resolve() / "ext"
    assert config.bin_dir == tmp_path.resolve() / "ext" / "bin"

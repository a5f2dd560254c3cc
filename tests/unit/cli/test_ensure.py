"""Tests for the Ensure CLI helpers."""

import pytest

from pact_cli.cli.ensure import Ensure, extension_errors
from pact_cli.core.errors import NotInstalledError


def test_not_none_returns_value() -> None:
    assert Ensure.not_none("pactflow-ai", "missing") == "pactflow-ai"


def test_not_none_keeps_falsy_values() -> None:
    assert Ensure.not_none("", "missing") == ""


def test_not_none_exits_with_styled_error(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        Ensure.not_none(None, "Please specify an extension name or use --all flag")

    assert exc_info.value.code == 1
    assert "Please specify an extension name or use --all flag" in capsys.readouterr().err


def test_invariant_passes_when_condition_holds() -> None:
    Ensure.invariant(True, "unused")


def test_extension_errors_exit_with_code_1(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        with extension_errors():
            raise NotInstalledError("Extension 'foo' is not installed.")

    assert exc_info.value.code == 1
    assert "Extension 'foo' is not installed." in capsys.readouterr().err

"""Tests for `pact extension update`."""

from pathlib import Path

from click.testing import CliRunner

from pact_cli.cli.cli import cli
from pact_cli.core.context import PactContext
from pact_cli.core.families import ExtensionFamily
from pact_cli.core.installer import install_family
from pact_cli.core.platform import Platform
from tests.fakes.http import FakeHttpClient
from tests.test_utils.releases import release_responses

LINUX = Platform("linux", "x86_64")


def _install(tmp_path: Path, family: ExtensionFamily, **versions: str) -> None:
    http = FakeHttpClient(responses=release_responses(LINUX, **versions))
    install_family(PactContext.for_test(tmp_path, http=http), family)


def test_update_installs_latest(tmp_path: Path) -> None:
    # Arrange
    _install(tmp_path, ExtensionFamily.PACTFLOW_AI, ai_version="1.0.0")
    http = FakeHttpClient(responses=release_responses(LINUX, ai_version="2.0.0"))
    ctx = PactContext.for_test(tmp_path, http=http)
    runner = CliRunner()

    # Act
    result = runner.invoke(cli, ["extension", "update", "pactflow-ai"], obj=ctx)

    # Assert
    assert result.exit_code == 0, result.output
    assert "Updating pactflow-ai" in result.output
    assert ctx.registry_store.load()["pactflow-ai"].version == "2.0.0"


def test_update_not_installed(tmp_path: Path) -> None:
    ctx = PactContext.for_test(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["extension", "update", "pactflow-ai"], obj=ctx)

    assert result.exit_code == 1
    assert "is not installed" in result.output


def test_update_all_with_nothing_installed(tmp_path: Path) -> None:
    ctx = PactContext.for_test(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["extension", "update", "--all"], obj=ctx)

    assert result.exit_code == 1
    assert "No extensions are currently installed" in result.output


def test_update_all(tmp_path: Path) -> None:
    _install(tmp_path, ExtensionFamily.PACT_LEGACY, legacy_version="v2.4.0")
    http = FakeHttpClient(responses=release_responses(LINUX, legacy_version="v2.5.0"))
    ctx = PactContext.for_test(tmp_path, http=http)
    runner = CliRunner()

    result = runner.invoke(cli, ["extension", "update", "--all"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ctx.registry_store.load()["pact-legacy"].version == "v2.5.0"


def test_update_requires_name_or_all(tmp_path: Path) -> None:
    ctx = PactContext.for_test(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["extension", "update"], obj=ctx)

    assert result.exit_code == 1
    assert "Please specify an extension name or use --all flag" in result.output

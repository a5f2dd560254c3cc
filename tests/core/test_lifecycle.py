"""Tests for install, update and uninstall by name."""

from pathlib import Path

import pytest

from pact_cli.core.context import PactContext
from pact_cli.core.errors import NotFoundError, NotInstalledError
from pact_cli.core.families import LEGACY_MASTER_NAME, LEGACY_TOOL_NAMES, ExtensionFamily
from pact_cli.core.lifecycle import (
    discover_path_extensions,
    install_all,
    install_extension,
    uninstall_all,
    uninstall_extension,
    update_all,
    update_extension,
)
from pact_cli.core.models import ExtensionKind, ExtensionRecord
from pact_cli.core.platform import Platform
from pact_cli.core.registry_store import InMemoryRegistryStore
from tests.fakes.http import FakeHttpClient
from tests.fakes.process_runner import FakeProcessRunner
from tests.test_utils.releases import release_responses

LINUX = Platform("linux", "x86_64")


def _ctx(tmp_path: Path, **kwargs: str) -> PactContext:
    return PactContext.for_test(
        tmp_path, http=FakeHttpClient(responses=release_responses(LINUX, **kwargs))
    )


def test_install_unknown_name_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError, match="pactflow-ai, pact-legacy"):
        install_extension(_ctx(tmp_path), "mock-legacy", None)


def test_install_all_installs_both_families(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)

    install_all(ctx, None)

    registry = ctx.registry_store.load()
    assert {"pactflow-ai", LEGACY_MASTER_NAME, *LEGACY_TOOL_NAMES} == set(registry)


def test_update_reinstalls_latest_version(tmp_path: Path) -> None:
    install_extension(_ctx(tmp_path, ai_version="1.0.0"), "pactflow-ai", None)
    ctx = _ctx(tmp_path, ai_version="1.1.0")

    family = update_extension(ctx, "pactflow-ai")

    assert family is ExtensionFamily.PACTFLOW_AI
    assert ctx.registry_store.load()["pactflow-ai"].version == "1.1.0"


def test_update_derived_tool_updates_whole_bundle(tmp_path: Path) -> None:
    install_extension(_ctx(tmp_path, legacy_version="v2.4.0"), "pact-legacy", None)
    ctx = _ctx(tmp_path, legacy_version="v2.5.0")

    family = update_extension(ctx, "mock-legacy")

    assert family is ExtensionFamily.PACT_LEGACY
    registry = ctx.registry_store.load()
    assert {record.version for record in registry.values()} == {"v2.5.0"}


def test_update_not_installed_builtin(tmp_path: Path) -> None:
    with pytest.raises(NotInstalledError, match="not installed"):
        update_extension(_ctx(tmp_path), "pactflow-ai")


def test_update_unknown_name(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        update_extension(_ctx(tmp_path), "nope")


def test_update_external_warns_and_does_nothing(tmp_path: Path) -> None:
    store = InMemoryRegistryStore(
        tmp_path / "bin",
        registry={
            "foo": ExtensionRecord(
                name="foo",
                version="1",
                binary_path="/usr/bin/pact-foo",
                extension_kind=ExtensionKind.EXTERNAL_ON_PATH,
                installed=True,
            )
        },
    )
    http = FakeHttpClient()
    ctx = PactContext.for_test(tmp_path, registry_store=store, http=http)

    assert update_extension(ctx, "foo") is None
    assert http.requested_urls == []
    assert store.save_count == 0


def test_update_all_with_nothing_installed(tmp_path: Path) -> None:
    with pytest.raises(NotInstalledError, match="No extensions are currently installed"):
        update_all(_ctx(tmp_path))


def test_update_all_updates_each_family_once(tmp_path: Path) -> None:
    install_all(_ctx(tmp_path, ai_version="1.0.0", legacy_version="v2.4.0"), None)
    ctx = _ctx(tmp_path, ai_version="1.1.0", legacy_version="v2.5.0")

    families = update_all(ctx)

    assert sorted(families) == sorted(ExtensionFamily)
    registry = ctx.registry_store.load()
    assert registry["pactflow-ai"].version == "1.1.0"
    assert registry["stub-legacy"].version == "v2.5.0"


def test_uninstall_single_binary_removes_file_and_record(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    install_extension(ctx, "pactflow-ai", None)

    removed = uninstall_extension(ctx, "pactflow-ai")

    assert removed == ["pactflow-ai"]
    assert "pactflow-ai" not in ctx.registry_store.load()
    assert not (tmp_path / "bin" / "pactflow-ai").exists()


def test_uninstall_legacy_master_cascades(tmp_path: Path) -> None:
    # Arrange
    ctx = _ctx(tmp_path)
    install_all(ctx, None)

    # Act
    removed = uninstall_extension(ctx, LEGACY_MASTER_NAME)

    # Assert
    assert set(removed) == {*LEGACY_TOOL_NAMES, LEGACY_MASTER_NAME}
    assert set(ctx.registry_store.load()) == {"pactflow-ai"}
    assert not (tmp_path / "pact-legacy").exists()
    for name in LEGACY_TOOL_NAMES:
        assert not (tmp_path / "bin" / name).exists()
        assert not (tmp_path / "bin" / name).is_symlink()


def test_uninstall_legacy_master_saves_once(tmp_path: Path) -> None:
    store = InMemoryRegistryStore(tmp_path / "bin")
    http = FakeHttpClient(responses=release_responses(LINUX))
    ctx = PactContext.for_test(tmp_path, registry_store=store, http=http)
    install_extension(ctx, LEGACY_MASTER_NAME, None)
    saves_after_install = store.save_count

    uninstall_extension(ctx, LEGACY_MASTER_NAME)

    assert store.save_count == saves_after_install + 1
    assert store.load() == {}


def test_uninstall_single_derived_tool_keeps_bundle(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    install_extension(ctx, LEGACY_MASTER_NAME, None)

    uninstall_extension(ctx, "mock-legacy")

    registry = ctx.registry_store.load()
    assert "mock-legacy" not in registry
    assert "stub-legacy" in registry
    assert (tmp_path / "pact-legacy").is_dir()


def test_uninstall_external_keeps_path_binary(tmp_path: Path) -> None:
    external = tmp_path / "pact-foo"
    external.write_bytes(b"")
    store = InMemoryRegistryStore(
        tmp_path / "bin",
        registry={
            "foo": ExtensionRecord(
                name="foo",
                version="1",
                binary_path=str(external),
                extension_kind=ExtensionKind.EXTERNAL_ON_PATH,
                installed=True,
            )
        },
    )
    ctx = PactContext.for_test(tmp_path, registry_store=store)

    uninstall_extension(ctx, "foo")

    assert store.load() == {}
    assert external.exists()


def test_uninstall_unknown_name_is_not_installed(tmp_path: Path) -> None:
    with pytest.raises(NotInstalledError):
        uninstall_extension(_ctx(tmp_path), "pactflow-ai")

    with pytest.raises(NotInstalledError):
        uninstall_extension(_ctx(tmp_path), LEGACY_MASTER_NAME)


def test_uninstall_all_removes_everything(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    install_all(ctx, None)

    removed = uninstall_all(ctx)

    assert set(removed) == {"pactflow-ai", LEGACY_MASTER_NAME, *LEGACY_TOOL_NAMES}
    assert ctx.registry_store.load() == {}
    assert not (tmp_path / "pact-legacy").exists()


def test_uninstall_all_with_nothing_installed_is_empty(tmp_path: Path) -> None:
    assert uninstall_all(_ctx(tmp_path)) == []


def _unrecorded_builtin(tmp_path: Path, name: str) -> Path:
    binary = tmp_path / "bin" / name
    binary.parent.mkdir(parents=True, exist_ok=True)
    binary.write_bytes(b"#!/bin/sh\n")
    return binary


def test_uninstall_unrecorded_builtin_on_disk(tmp_path: Path) -> None:
    # Arrange
    binary = _unrecorded_builtin(tmp_path, "pactflow-ai")
    ctx = _ctx(tmp_path)
    assert ctx.registry_store.list_extensions()["pactflow-ai"].installed is True

    # Act
    removed = uninstall_extension(ctx, "pactflow-ai")

    # Assert
    assert removed == ["pactflow-ai"]
    assert not binary.exists()
    assert ctx.registry_store.list_extensions()["pactflow-ai"].installed is False


def test_uninstall_all_includes_unrecorded_builtins(tmp_path: Path) -> None:
    # Arrange
    ai_binary = _unrecorded_builtin(tmp_path, "pactflow-ai")
    alias = _unrecorded_builtin(tmp_path, "mock-legacy")
    (tmp_path / "pact-legacy" / "bin").mkdir(parents=True)
    ctx = _ctx(tmp_path)

    # Act
    removed = uninstall_all(ctx)

    # Assert
    assert set(removed) == {"pactflow-ai", "mock-legacy"}
    assert not ai_binary.exists()
    assert not alias.exists()
    assert not (tmp_path / "pact-legacy").exists()


def test_uninstall_all_removes_leftover_legacy_dir(tmp_path: Path) -> None:
    (tmp_path / "pact-legacy" / "bin").mkdir(parents=True)
    ctx = _ctx(tmp_path)

    assert uninstall_all(ctx) == []
    assert not (tmp_path / "pact-legacy").exists()


def test_install_uninstall_install_matches_single_install(tmp_path: Path) -> None:
    once = _ctx(tmp_path / "once")
    install_all(once, None)

    twice = _ctx(tmp_path / "twice")
    install_all(twice, None)
    uninstall_all(twice)
    install_all(twice, None)

    def _shape(ctx: PactContext) -> dict[str, tuple[str, str, bool]]:
        home = str(ctx.config.extensions_home)
        return {
            name: (record.version, record.binary_path.replace(home, "~"), record.installed)
            for name, record in ctx.registry_store.load().items()
        }

    assert _shape(once) == _shape(twice)


def test_discover_path_extensions_skips_known_names(tmp_path: Path) -> None:
    processes = FakeProcessRunner(
        path_binaries={
            "pact-foo": "/usr/local/bin/pact-foo",
            "pact-pactflow-ai": "/usr/local/bin/pact-pactflow-ai",
        }
    )
    ctx = PactContext.for_test(tmp_path, processes=processes)
    known = ctx.registry_store.list_extensions()

    discovered = discover_path_extensions(ctx, known)

    assert list(discovered) == ["foo"]
    assert discovered["foo"].extension_kind is ExtensionKind.EXTERNAL_ON_PATH
    assert discovered["foo"].binary_path == "/usr/local/bin/pact-foo"


def test_installing_same_version_twice_keeps_one_record_per_name(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path, legacy_version="v2.4.0")

    install_extension(ctx, LEGACY_MASTER_NAME, "v2.4.0")
    install_extension(ctx, LEGACY_MASTER_NAME, "v2.4.0")

    registry = ctx.registry_store.load()
    assert set(registry) == {*LEGACY_TOOL_NAMES, LEGACY_MASTER_NAME}
    assert (tmp_path / "bin" / "stub-legacy").is_symlink()


def test_explicit_pactflow_ai_version_installs_executable(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path, ai_version="2.0.0")

    install_extension(ctx, "pactflow-ai", "2.0.0")

    registry = ctx.registry_store.load()
    assert list(registry) == ["pactflow-ai"]
    record = registry["pactflow-ai"]
    assert record.version == "2.0.0"
    assert record.installed is True
    assert Path(record.binary_path).stat().st_mode & 0o111


def test_listing_after_master_uninstall_shows_tools_not_installed(tmp_path: Path) -> None:
    ctx = _ctx(tmp_path)
    install_extension(ctx, LEGACY_MASTER_NAME, None)

    uninstall_extension(ctx, LEGACY_MASTER_NAME)

    listed = ctx.registry_store.list_extensions()
    for name in LEGACY_TOOL_NAMES:
        assert listed[name].installed is False

"""Install, update and uninstall extensions by name.

These are the operations behind ``pact extension install|update|uninstall``.
Per-name state machine: NotInstalled -> install -> Installed -> uninstall ->
NotInstalled, with update as a self-loop on Installed. The pact-legacy master
record owns every derived legacy tool record; uninstalling it removes them all
and persists the registry once.
"""

import logging
import shutil
from pathlib import Path

from pact_cli.core.context import PactContext
from pact_cli.core.errors import FilesystemError, NotFoundError, NotInstalledError
from pact_cli.core.families import (
    LEGACY_MASTER_NAME,
    LEGACY_TOOL_NAMES,
    ExtensionFamily,
    family_for_kind,
)
from pact_cli.core.installer import install_family
from pact_cli.core.invoker import EXTERNAL_BINARY_PREFIX
from pact_cli.core.models import ExtensionKind, ExtensionRecord, Registry
from pact_cli.output import user_output

logger = logging.getLogger(__name__)

INSTALLABLE_NAMES: tuple[str, ...] = tuple(family.value for family in ExtensionFamily)


def install_extension(ctx: PactContext, name: str, version: str | None) -> list[ExtensionRecord]:
    """Install the family called name.

    Raises:
        NotFoundError: If name is not an installable family
    """
    if name not in INSTALLABLE_NAMES:
        raise NotFoundError(
            f"Unknown extension: {name}. Installable extensions: {', '.join(INSTALLABLE_NAMES)}"
        )
    return install_family(ctx, ExtensionFamily(name), version)


def install_all(ctx: PactContext, version: str | None) -> list[ExtensionRecord]:
    """Install every family, one after another."""
    records: list[ExtensionRecord] = []
    for family in ExtensionFamily:
        records.extend(install_family(ctx, family, version))
    return records


def update_extension(ctx: PactContext, name: str) -> ExtensionFamily | None:
    """Reinstall the latest release of the family that provides name.

    Derived legacy tool names update the whole bundle.

    Returns:
        The family that was updated, or None for external extensions, which
        are managed outside pact

    Raises:
        NotFoundError: If name is unknown
        NotInstalledError: If name is known but not installed
    """
    record = ctx.registry_store.list_extensions().get(name)
    if record is None:
        raise NotFoundError(
            f"Extension '{name}' not found. "
            "Available extensions can be listed with 'pact extension list'."
        )
    if not record.installed:
        raise NotInstalledError(
            f"Extension '{name}' is not installed. Run 'pact extension install' first."
        )

    family = family_for_kind(record.extension_kind)
    if family is None:
        user_output(f"Warning: cannot update external extension: {name}")
        return None

    user_output(f"Updating {name}...")
    install_family(ctx, family, None)
    return family


def update_all(ctx: PactContext) -> list[ExtensionFamily]:
    """Update every installed family once.

    Raises:
        NotInstalledError: If nothing is installed
    """
    installed = [r for r in ctx.registry_store.list_extensions().values() if r.installed]
    if not installed:
        raise NotInstalledError(
            "No extensions are currently installed. "
            "Use 'pact extension install' to install extensions first."
        )

    families: list[ExtensionFamily] = []
    for record in sorted(installed, key=lambda r: r.name):
        family = family_for_kind(record.extension_kind)
        if family is None:
            user_output(f"Warning: cannot update external extension: {record.name}")
            continue
        if family not in families:
            families.append(family)

    for family in families:
        user_output(f"Updating {family}...")
        install_family(ctx, family, None)
    return families


def uninstall_extension(ctx: PactContext, name: str) -> list[str]:
    """Remove an extension's files and registry record.

    Uninstalling the pact-legacy master also removes every derived legacy
    tool: aliases, the extracted bundle directory and all their records,
    persisted with a single save.

    Returns:
        Names removed from the registry

    Raises:
        NotInstalledError: If nothing is installed under name
        FilesystemError: If files cannot be removed
    """
    registry = ctx.registry_store.load()

    if name == LEGACY_MASTER_NAME:
        removed = _uninstall_legacy_bundle(ctx, registry)
    elif name in registry:
        record = registry.pop(name)
        if record.extension_kind is not ExtensionKind.EXTERNAL_ON_PATH:
            _remove_path(Path(record.binary_path))
        removed = [name]
    else:
        # A builtin can sit at its conventional path without a registry record
        builtin = ctx.registry_store.list_extensions().get(name)
        if builtin is None or not builtin.installed:
            raise NotInstalledError(f"Extension '{name}' is not installed.")
        _remove_path(Path(builtin.binary_path))
        removed = [name]

    ctx.registry_store.save(registry)
    for removed_name in removed:
        user_output(f"Removed {removed_name}")
    return removed


def uninstall_all(ctx: PactContext) -> list[str]:
    """Uninstall every installed extension.

    Builtins present on disk count as installed whether or not the registry
    records them. Legacy tool entries collapse into their master so the bundle
    is removed once.

    Returns:
        Names removed (empty if nothing was installed)
    """
    targets: list[str] = []
    for name, record in sorted(ctx.registry_store.list_extensions().items()):
        if not record.installed:
            continue
        if record.extension_kind is ExtensionKind.BUNDLED_LEGACY_TOOL:
            name = LEGACY_MASTER_NAME
        if name not in targets:
            targets.append(name)
    if LEGACY_MASTER_NAME not in targets and ctx.config.legacy_dir.exists():
        targets.append(LEGACY_MASTER_NAME)

    removed: list[str] = []
    for name in targets:
        removed.extend(uninstall_extension(ctx, name))
    return removed


def discover_path_extensions(ctx: PactContext, known: Registry) -> Registry:
    """Find ``pact-<name>`` executables on PATH that the registry does not know.

    Discovered entries are reported as ExternalOnPath and are not persisted.
    """
    discovered: Registry = {}
    for executable, path in ctx.processes.path_executables(EXTERNAL_BINARY_PREFIX).items():
        name = executable.removeprefix(EXTERNAL_BINARY_PREFIX)
        if not name or name in known:
            continue
        discovered[name] = ExtensionRecord(
            name=name,
            version="-",
            binary_path=path,
            extension_kind=ExtensionKind.EXTERNAL_ON_PATH,
            installed=True,
        )
    return discovered


def _uninstall_legacy_bundle(ctx: PactContext, registry: Registry) -> list[str]:
    master = registry.get(LEGACY_MASTER_NAME)
    legacy_dir = Path(master.binary_path) if master is not None else ctx.config.legacy_dir
    derived = [
        name
        for name, record in registry.items()
        if record.extension_kind is ExtensionKind.BUNDLED_LEGACY_TOOL and name != LEGACY_MASTER_NAME
    ]
    # Aliases at the conventional paths belong to the bundle even without a record
    unrecorded = [
        name
        for name in LEGACY_TOOL_NAMES
        if name not in derived and _path_present(ctx.registry_store.builtin_binary_path(name))
    ]

    if master is None and not derived and not unrecorded and not legacy_dir.exists():
        raise NotInstalledError(f"Extension '{LEGACY_MASTER_NAME}' is not installed.")

    user_output(f"Uninstalling {LEGACY_MASTER_NAME} and all legacy tools...")
    for name in derived:
        _remove_path(Path(registry.pop(name).binary_path))
    for name in LEGACY_TOOL_NAMES:
        _remove_path(ctx.registry_store.builtin_binary_path(name))

    _remove_path(legacy_dir)
    removed = [*derived, *unrecorded]
    if master is not None:
        del registry[LEGACY_MASTER_NAME]
        removed.append(LEGACY_MASTER_NAME)
    return removed


def _path_present(path: Path) -> bool:
    return path.is_symlink() or path.exists()


def _remove_path(path: Path) -> None:
    """Remove a file, alias or directory; already-removed paths are fine."""
    try:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)
        else:
            return
    except FileNotFoundError:
        return
    except OSError as e:
        raise FilesystemError(f"Could not remove {path}: {e}") from e
    logger.debug("Removed %s", path)

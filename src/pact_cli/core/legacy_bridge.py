"""Bridge the legacy standalone bundle into individually named commands.

The pact-legacy archive contains several Ruby standalone tools under
``bin/``. Each known tool is exposed under its pact command name by an alias
in the extensions ``bin`` directory, and recorded as a derived registry entry
owned by the ``pact-legacy`` master entry.
"""

import logging
import os
import shutil
from pathlib import Path

from pact_cli.core.errors import FilesystemError
from pact_cli.core.families import LEGACY_MASTER_NAME, LEGACY_TOOL_MAPPINGS
from pact_cli.core.models import ExtensionKind, ExtensionRecord
from pact_cli.core.platform import Platform

logger = logging.getLogger(__name__)


def create_alias(source: Path, alias: Path, *, use_symlink: bool) -> None:
    """Expose source at alias, replacing any previous alias.

    A symbolic link is used where supported. When symlinks are unavailable
    (Windows, or environments that refuse symlink creation) the file is copied.

    Raises:
        FilesystemError: If the alias cannot be created
    """
    try:
        if alias.is_symlink() or alias.exists():
            alias.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        raise FilesystemError(f"Could not replace existing alias {alias}: {e}") from e

    if use_symlink:
        try:
            os.symlink(source, alias)
            return
        except OSError as e:
            logger.debug("Symlink %s -> %s failed (%s), copying instead", alias, source, e)

    try:
        shutil.copy2(source, alias)
    except OSError as e:
        raise FilesystemError(f"Could not create alias {alias} for {source}: {e}") from e


def bridge_legacy_bundle(
    extraction_dir: Path,
    bin_dir: Path,
    version: str,
    platform: Platform,
) -> list[ExtensionRecord]:
    """Create aliases for every known tool present in an extracted bundle.

    Tools missing from the extracted tree are skipped: older and newer bundle
    layouts do not all ship the same set of tools.

    Args:
        extraction_dir: Root of the extracted bundle
        bin_dir: Directory that receives the command aliases
        version: Bundle version recorded on every entry
        platform: Platform used for executable suffix and alias strategy

    Returns:
        One derived record per alias created, followed by the master record

    Raises:
        FilesystemError: If bin_dir cannot be created or an alias fails
    """
    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Could not create {bin_dir}: {e}") from e

    # Aliases and records must not depend on the working directory
    extraction_dir = extraction_dir.resolve()
    bin_dir = bin_dir.resolve()
    suffix = platform.executable_suffix
    use_symlink = platform.os != "windows"
    bundle_bin_dir = extraction_dir / "bin"

    records: list[ExtensionRecord] = []
    for source_name, command_name in LEGACY_TOOL_MAPPINGS:
        source = bundle_bin_dir / f"{source_name}{suffix}"
        if not source.exists():
            logger.debug("Bundle %s has no %s, skipping %s", version, source_name, command_name)
            continue

        alias = bin_dir / f"{command_name}{suffix}"
        create_alias(source, alias, use_symlink=use_symlink)
        logger.debug("Created legacy alias %s -> %s", alias, source)

        records.append(
            ExtensionRecord(
                name=command_name,
                version=version,
                binary_path=str(alias),
                extension_kind=ExtensionKind.BUNDLED_LEGACY_TOOL,
                installed=True,
            )
        )

    records.append(
        ExtensionRecord(
            name=LEGACY_MASTER_NAME,
            version=version,
            binary_path=str(extraction_dir),
            extension_kind=ExtensionKind.BUNDLED_LEGACY_TOOL,
            installed=extraction_dir.is_dir(),
        )
    )
    return records

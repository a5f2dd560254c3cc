"""Artifact download and installation for extension families.

Installation order is fixed: platform check, version resolution, download,
placement on disk (plus extraction and alias bridging for the bundle), and
finally a single registry save. The registry is only written after every
filesystem step succeeded, so an aborted install leaves no record behind.
"""

import logging
import shutil
from pathlib import Path

from pact_cli.core.context import PactContext
from pact_cli.core.errors import FilesystemError, RemoteStatusError
from pact_cli.core.families import LEGACY_TOOL_NAMES, ExtensionFamily
from pact_cli.core.legacy_bridge import bridge_legacy_bundle
from pact_cli.core.models import ExtensionKind, ExtensionRecord, Registry
from pact_cli.core.platform import Platform, artifact_target, ensure_supported
from pact_cli.core.version_resolver import USER_AGENT, resolve_latest_version
from pact_cli.output import user_output

logger = logging.getLogger(__name__)

PACTFLOW_AI_DOWNLOAD_URL = "https://download.pactflow.io/ai/dist/{target}/{version}/pactflow-ai"
PACT_STANDALONE_DOWNLOAD_URL = (
    "https://github.com/pact-foundation/pact-standalone/releases/download/"
    "{version}/pact-{bare_version}-{target}.{archive_ext}"
)


def download_url(family: ExtensionFamily, platform: Platform, version: str) -> str:
    """Compute the release artifact URL for a family, platform and version."""
    target = artifact_target(family, platform)
    if family is ExtensionFamily.PACTFLOW_AI:
        return PACTFLOW_AI_DOWNLOAD_URL.format(target=target, version=version)
    return PACT_STANDALONE_DOWNLOAD_URL.format(
        version=version,
        bare_version=version.lstrip("v"),
        target=target,
        archive_ext=platform.archive_extension,
    )


def install_family(
    ctx: PactContext,
    family: ExtensionFamily,
    version: str | None = None,
) -> list[ExtensionRecord]:
    """Download and install a family, then record it in the registry.

    Args:
        ctx: Application context
        family: Family to install
        version: Explicit version, or None to resolve the latest release

    Returns:
        Records written to the registry by this install

    Raises:
        UnsupportedPlatformError: Before any network access, if unsupported
        NetworkError: If a request failed or timed out
        RemoteStatusError: If version lookup or download returned non-success
        VersionResolutionError: If the latest version could not be determined
        ArchiveExtractionError: If the bundle could not be extracted
        FilesystemError: If files, directories or aliases could not be written
    """
    ensure_supported(ctx.platform)

    if version is None:
        version = resolve_latest_version(ctx.http, family, ctx.platform)

    url = download_url(family, ctx.platform, version)
    user_output(f"Downloading {family} {version} from {url}")
    content = _download(ctx, family, url)

    if family is ExtensionFamily.PACTFLOW_AI:
        records = [_place_single_binary(ctx, content, version)]
    else:
        records = _place_legacy_bundle(ctx, content, version)

    registry = ctx.registry_store.load()
    if family is ExtensionFamily.PACT_LEGACY:
        _drop_stale_legacy_records(registry, {r.name for r in records})
    for record in records:
        registry[record.name] = record
    ctx.registry_store.save(registry)

    user_output(f"Installed {family} {version}")
    return records


def _download(ctx: PactContext, family: ExtensionFamily, url: str) -> bytes:
    response = ctx.http.get(url, headers={"User-Agent": USER_AGENT})
    if not response.is_success:
        raise RemoteStatusError(f"Download of {family}", url, response.status_code)
    return response.content


def _place_single_binary(ctx: PactContext, content: bytes, version: str) -> ExtensionRecord:
    bin_dir = ctx.config.bin_dir
    name = ExtensionFamily.PACTFLOW_AI.value
    binary_path = bin_dir / f"{name}{ctx.platform.executable_suffix}"
    temp_path = binary_path.with_name(binary_path.name + ".download")

    try:
        bin_dir.mkdir(parents=True, exist_ok=True)
        temp_path.write_bytes(content)
        if ctx.platform.os != "windows":
            temp_path.chmod(0o755)
        temp_path.replace(binary_path)
    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        raise FilesystemError(f"Could not write {name} to {binary_path}: {e}") from e

    logger.debug("Wrote %d bytes to %s", len(content), binary_path)
    return ExtensionRecord(
        name=name,
        version=version,
        binary_path=str(binary_path),
        extension_kind=ExtensionKind.REMOTE_SINGLE_BINARY,
        installed=True,
    )


def _place_legacy_bundle(ctx: PactContext, content: bytes, version: str) -> list[ExtensionRecord]:
    """Extract the bundle into the legacy directory and bridge its tools.

    Extraction happens in a staging directory that replaces the previous
    bundle only once it is complete, so a failed extraction leaves an
    existing install untouched.
    """
    home = ctx.config.extensions_home
    legacy_dir = ctx.config.legacy_dir
    archive_path = home / f"{legacy_dir.name}.{ctx.platform.archive_extension}"
    staging_dir = legacy_dir.with_name(legacy_dir.name + ".staging")

    try:
        try:
            home.mkdir(parents=True, exist_ok=True)
            archive_path.write_bytes(content)
            if staging_dir.exists():
                shutil.rmtree(staging_dir)
        except OSError as e:
            raise FilesystemError(f"Could not write bundle archive {archive_path}: {e}") from e

        user_output(f"Extracting {legacy_dir.name}...")
        ctx.archive.extract(archive_path, staging_dir)
        _swap_directory(staging_dir, legacy_dir)
    finally:
        if archive_path.exists():
            archive_path.unlink()
        if staging_dir.exists():
            shutil.rmtree(staging_dir, ignore_errors=True)

    records = bridge_legacy_bundle(legacy_dir, ctx.config.bin_dir, version, ctx.platform)
    for record in records[:-1]:
        user_output(f"  Linked {record.name}")
    return records


def _swap_directory(staging_dir: Path, target_dir: Path) -> None:
    try:
        if target_dir.exists():
            shutil.rmtree(target_dir)
        staging_dir.rename(target_dir)
    except OSError as e:
        raise FilesystemError(f"Could not move extracted bundle into {target_dir}: {e}") from e


def _drop_stale_legacy_records(registry: Registry, current_names: set[str]) -> None:
    """Remove derived tool records (and aliases) the new bundle no longer provides."""
    for name in LEGACY_TOOL_NAMES:
        if name in current_names or name not in registry:
            continue
        alias = Path(registry[name].binary_path)
        if alias.is_symlink() or alias.is_file():
            try:
                alias.unlink()
            except OSError as e:
                raise FilesystemError(f"Could not remove stale alias {alias}: {e}") from e
        del registry[name]
        logger.debug("Dropped %s, not provided by the new bundle", name)

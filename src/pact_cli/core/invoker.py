"""Resolve an extension name to an executable and run it.

Resolution order:
1. a registry record that is installed runs its recorded binary
2. a registry record that is not installed is an error naming the install command
3. an unknown name runs ``pact-<name>`` from PATH, if it can be launched

The child process inherits stdio and its exit code is relayed unchanged. A
nonzero exit of the extension is not an error of this module.
"""

import logging
from pathlib import Path

from pact_cli.core.context import PactContext
from pact_cli.core.errors import FilesystemError, NotFoundError, NotInstalledError
from pact_cli.core.families import family_for_name

logger = logging.getLogger(__name__)

EXTERNAL_BINARY_PREFIX = "pact-"


def external_binary_name(name: str) -> str:
    return f"{EXTERNAL_BINARY_PREFIX}{name}"


def install_hint(name: str) -> str:
    family = family_for_name(name)
    target = family.value if family is not None else name
    return f"pact extension install {target}"


def run_extension(ctx: PactContext, name: str, args: list[str]) -> int:
    """Run an extension with args, returning its exit code.

    The installed flag from the registry is re-verified against the disk
    here, at invocation time, rather than on every listing.

    Raises:
        NotInstalledError: If the registry knows the name but it is not installed,
            or its recorded binary has disappeared
        FilesystemError: If the recorded binary exists but cannot be launched
        NotFoundError: If the name is unknown and no PATH binary can be launched
    """
    registry = ctx.registry_store.load()
    record = registry.get(name)

    if record is not None:
        if not record.installed:
            raise NotInstalledError(
                f"Extension '{name}' is not installed. Run '{install_hint(name)}' first."
            )
        if not Path(record.binary_path).exists():
            raise NotInstalledError(
                f"Extension '{name}' is recorded as installed but {record.binary_path} "
                f"is missing. Run '{install_hint(name)}' to reinstall it."
            )
        logger.debug("Running registered extension %s: %s", name, record.binary_path)
        try:
            return ctx.processes.run([record.binary_path, *args])
        except OSError as e:
            raise FilesystemError(
                f"Could not launch extension '{name}' from {record.binary_path}: {e}"
            ) from e

    binary_name = external_binary_name(name)
    logger.debug("No registry entry for %s, trying %s on PATH", name, binary_name)
    try:
        return ctx.processes.run([binary_name, *args])
    except OSError as e:
        raise NotFoundError(
            f"Extension '{name}' not found. "
            "Available extensions can be listed with 'pact extension list'."
        ) from e

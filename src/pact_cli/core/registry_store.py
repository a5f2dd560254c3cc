"""Persisted registry of installed extensions.

The registry is the single source of truth for what is installed. Loading is
best-effort: a missing or corrupt document yields an empty registry so that a
lost config never blocks a first-time install.

There is no locking across processes. Two invocations racing through
load -> mutate -> save can lose one writer's update (last save wins).
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from pact_cli.core.errors import FilesystemError
from pact_cli.core.families import BUILTIN_EXTENSIONS
from pact_cli.core.models import LATEST_VERSION, REGISTRY_ADAPTER, ExtensionRecord, Registry

logger = logging.getLogger(__name__)


class RegistryStore(ABC):
    """Abstract interface for registry persistence.

    Provides dependency injection for registry access, enabling in-memory
    implementations for tests without touching the registry file.
    """

    def __init__(self, bin_dir: Path, executable_suffix: str) -> None:
        """Initialize store.

        Args:
            bin_dir: Directory holding builtin extension binaries and aliases
            executable_suffix: Platform executable suffix ("" or ".exe")
        """
        self._bin_dir = bin_dir
        self._executable_suffix = executable_suffix

    @abstractmethod
    def load(self) -> Registry:
        """Load the registry, returning an empty mapping if none is persisted."""
        ...

    @abstractmethod
    def save(self, registry: Registry) -> None:
        """Persist the full registry.

        Raises:
            FilesystemError: If the document cannot be written
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the registry document path (for messages and debugging)."""
        ...

    def builtin_binary_path(self, name: str) -> Path:
        return self._bin_dir / f"{name}{self._executable_suffix}"

    def list_extensions(self) -> Registry:
        """Load the registry merged with builtin entries not yet recorded.

        Synthesized builtin entries report installed based on whether their
        conventional binary path exists on disk. Recorded entries are returned
        as persisted.
        """
        registry = self.load()
        for name, kind in BUILTIN_EXTENSIONS:
            if name in registry:
                continue
            binary_path = self.builtin_binary_path(name)
            registry[name] = ExtensionRecord(
                name=name,
                version=LATEST_VERSION,
                binary_path=str(binary_path),
                extension_kind=kind,
                installed=binary_path.exists(),
            )
        return registry


class FilesystemRegistryStore(RegistryStore):
    """Production implementation that reads/writes <extensions_home>/config.json."""

    def __init__(self, registry_path: Path, bin_dir: Path, executable_suffix: str) -> None:
        super().__init__(bin_dir, executable_suffix)
        self._registry_path = registry_path

    def load(self) -> Registry:
        registry_path = self._registry_path
        if not registry_path.exists():
            return {}

        try:
            content = registry_path.read_bytes()
        except OSError as e:
            logger.warning("Ignoring unreadable extension registry %s: %s", registry_path, e)
            return {}

        try:
            return REGISTRY_ADAPTER.validate_json(content)
        except ValidationError as e:
            logger.warning(
                "Ignoring corrupt extension registry %s (%d errors)", registry_path, e.error_count()
            )
            return {}

    def save(self, registry: Registry) -> None:
        """Write the registry atomically.

        Writes to a temporary sibling file first, then renames over the target
        so a failed write leaves the previous document intact.
        """
        registry_path = self._registry_path
        temp_path = registry_path.with_suffix(".json.tmp")

        data = REGISTRY_ADAPTER.dump_python(registry, mode="json")
        try:
            registry_path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.write("\n")
            temp_path.replace(registry_path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise FilesystemError(
                f"Could not save extension registry to {registry_path}: {e}\n"
                f"Check that {registry_path.parent} is writable."
            ) from e

        logger.debug("Saved %d registry entries to %s", len(registry), registry_path)

    def path(self) -> Path:
        return self._registry_path


class InMemoryRegistryStore(RegistryStore):
    """Test implementation that keeps the registry in memory.

    Builtin entries still check the filesystem for their conventional binary
    path, matching the production listing behaviour.
    """

    def __init__(
        self,
        bin_dir: Path,
        executable_suffix: str = "",
        registry: Registry | None = None,
    ) -> None:
        super().__init__(bin_dir, executable_suffix)
        self._registry: Registry = dict(registry) if registry else {}
        self._save_count = 0

    def load(self) -> Registry:
        return dict(self._registry)

    def save(self, registry: Registry) -> None:
        self._registry = dict(registry)
        self._save_count += 1

    def path(self) -> Path:
        return Path("/fake/pact/extensions/config.json")

    @property
    def save_count(self) -> int:
        """Number of save() calls made (for test assertions)."""
        return self._save_count

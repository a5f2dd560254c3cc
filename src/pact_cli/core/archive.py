"""Archive extraction for bundled extension releases.

Release archives wrap their contents in a single top-level directory
(``pact/bin/...``). Extraction strips that first path component so the bundle
lands directly in the destination, equivalent to ``tar --strip-components=1``.
"""

import logging
import shutil
import tarfile
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

from pact_cli.core.errors import ArchiveExtractionError

logger = logging.getLogger(__name__)


class ArchiveExtractor(ABC):
    """Abstract interface for unpacking downloaded archives."""

    @abstractmethod
    def extract(self, archive_path: Path, destination: Path) -> None:
        """Extract archive_path into destination, stripping the top-level directory.

        The archive format is chosen from the file name (.zip or .tar.gz).

        Raises:
            ArchiveExtractionError: If the archive is unreadable or unsafe
        """
        ...


def _strip_first_component(name: str) -> str | None:
    parts = PurePosixPath(name.replace("\\", "/")).parts
    if len(parts) <= 1:
        return None
    return str(PurePosixPath(*parts[1:]))


class RealArchiveExtractor(ArchiveExtractor):
    """Extracts archives with the standard library tarfile/zipfile readers."""

    def extract(self, archive_path: Path, destination: Path) -> None:
        if not archive_path.exists():
            raise ArchiveExtractionError(f"Extraction failed: archive not found at {archive_path}")

        try:
            destination.mkdir(parents=True, exist_ok=True)
            if archive_path.name.endswith(".zip"):
                self._extract_zip(archive_path, destination)
            else:
                self._extract_tar(archive_path, destination)
        except (tarfile.TarError, zipfile.BadZipFile, OSError, ValueError) as e:
            raise ArchiveExtractionError(
                f"Extraction failed for {archive_path.name}: {e}"
            ) from e

        logger.debug("Extracted %s into %s", archive_path, destination)

    def _extract_tar(self, archive_path: Path, destination: Path) -> None:
        with tarfile.open(archive_path, "r:*") as tar:
            members: list[tarfile.TarInfo] = []
            for member in tar.getmembers():
                stripped = _strip_first_component(member.name)
                if stripped is None:
                    continue
                changes: dict[str, str] = {"name": stripped}
                if member.islnk():
                    link_target = _strip_first_component(member.linkname)
                    if link_target is None:
                        continue
                    changes["linkname"] = link_target
                members.append(member.replace(**changes, deep=False))
            tar.extractall(destination, members=members, filter="data")

    def _extract_zip(self, archive_path: Path, destination: Path) -> None:
        root = destination.resolve()
        with zipfile.ZipFile(archive_path) as archive:
            for info in archive.infolist():
                stripped = _strip_first_component(info.filename)
                if stripped is None:
                    continue
                target = (destination / stripped).resolve()
                if not target.is_relative_to(root):
                    raise ValueError(f"archive entry escapes destination: {info.filename}")

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as source, target.open("wb") as sink:
                    shutil.copyfileobj(source, sink)

                mode = (info.external_attr >> 16) & 0o777
                if mode:
                    target.chmod(mode)

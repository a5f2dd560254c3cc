"""Platform detection and artifact target resolution.

Each extension family publishes artifacts under its own target naming
convention. The two conventions are kept as separate finite maps keyed by the
canonical (os, arch) pair so each can be audited on its own.
"""

import platform as _platform
from dataclasses import dataclass

from pact_cli.core.errors import UnsupportedPlatformError
from pact_cli.core.families import ExtensionFamily

_OS_LABELS = {
    "darwin": "darwin",
    "macos": "darwin",
    "windows": "windows",
    "linux": "linux",
}

_ARCH_LABELS = {
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
}

SUPPORTED_PLATFORMS: frozenset[tuple[str, str]] = frozenset(
    {
        ("darwin", "aarch64"),
        ("darwin", "x86_64"),
        ("windows", "aarch64"),
        ("windows", "x86_64"),
        ("linux", "aarch64"),
        ("linux", "x86_64"),
    }
)

PACTFLOW_AI_TARGETS: dict[tuple[str, str], str] = {
    ("darwin", "aarch64"): "aarch64-apple-darwin",
    ("darwin", "x86_64"): "x86_64-apple-darwin",
    ("windows", "aarch64"): "aarch64-pc-windows-msvc",
    ("windows", "x86_64"): "x86_64-pc-windows-msvc",
    ("linux", "aarch64"): "aarch64-unknown-linux-gnu",
    ("linux", "x86_64"): "x86_64-unknown-linux-gnu",
}

# Windows arm64 is not published; the x86_64 build runs under emulation
PACT_STANDALONE_TARGETS: dict[tuple[str, str], str] = {
    ("darwin", "aarch64"): "osx-arm64",
    ("darwin", "x86_64"): "osx-x86_64",
    ("windows", "aarch64"): "windows-x86_64",
    ("windows", "x86_64"): "windows-x86_64",
    ("linux", "aarch64"): "linux-arm64",
    ("linux", "x86_64"): "linux-x86_64",
}

_TARGET_TABLES: dict[ExtensionFamily, dict[tuple[str, str], str]] = {
    ExtensionFamily.PACTFLOW_AI: PACTFLOW_AI_TARGETS,
    ExtensionFamily.PACT_LEGACY: PACT_STANDALONE_TARGETS,
}


@dataclass(frozen=True)
class Platform:
    """Canonical operating system and CPU architecture labels."""

    os: str
    arch: str

    @property
    def pair(self) -> tuple[str, str]:
        return (self.os, self.arch)

    @property
    def executable_suffix(self) -> str:
        return ".exe" if self.os == "windows" else ""

    @property
    def archive_extension(self) -> str:
        return "zip" if self.os == "windows" else "tar.gz"

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


def normalize_os(raw: str) -> str:
    lowered = raw.lower()
    return _OS_LABELS.get(lowered, lowered)


def normalize_arch(raw: str) -> str:
    """Map an architecture name to its canonical label.

    Unrecognized architectures pass through unchanged so that the support
    check can still name them in its error.
    """
    return _ARCH_LABELS.get(raw.lower(), raw)


def detect_platform() -> Platform:
    return Platform(
        os=normalize_os(_platform.system()),
        arch=normalize_arch(_platform.machine()),
    )


def is_supported(platform: Platform) -> bool:
    return platform.pair in SUPPORTED_PLATFORMS


def ensure_supported(platform: Platform) -> None:
    """Raise UnsupportedPlatformError unless the platform has published artifacts."""
    if not is_supported(platform):
        raise UnsupportedPlatformError(platform.os, platform.arch)


def artifact_target(family: ExtensionFamily, platform: Platform) -> str:
    """Look up the family-specific release target for a platform.

    Raises:
        UnsupportedPlatformError: If the family publishes nothing for the pair
    """
    target = _TARGET_TABLES[family].get(platform.pair)
    if target is None:
        raise UnsupportedPlatformError(platform.os, platform.arch)
    return target

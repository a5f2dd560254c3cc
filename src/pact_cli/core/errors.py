"""Error taxonomy for extension lifecycle operations.

Every failure raised by the lifecycle layer derives from ExtensionError so the
CLI boundary can catch a single type and print one clear message. Messages
name the step that failed and, where one exists, the command that fixes it.
"""


class ExtensionError(Exception):
    """Base class for all extension lifecycle failures."""

    pass


class UnsupportedPlatformError(ExtensionError):
    """Raised before any I/O when the (os, arch) pair has no published artifact."""

    def __init__(self, os_name: str, arch: str):
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"Platform check failed: unsupported platform {os_name}-{arch}")


class NetworkError(ExtensionError):
    """Raised when a request could not be completed (connection failure or timeout)."""

    pass


class RemoteStatusError(ExtensionError):
    """Raised when the remote answered with a non-success status."""

    def __init__(self, step: str, url: str, status_code: int):
        self.step = step
        self.url = url
        self.status_code = status_code
        super().__init__(f"{step} failed: HTTP {status_code} from {url}")


class VersionResolutionError(ExtensionError):
    """Raised when release metadata does not contain a usable version."""

    pass


class ArchiveExtractionError(ExtensionError):
    """Raised when a downloaded bundle cannot be extracted."""

    pass


class FilesystemError(ExtensionError):
    """Raised for permission problems, missing directories and alias failures."""

    pass


class NotInstalledError(ExtensionError):
    """Raised when an operation targets an extension that is not installed."""

    pass


class NotFoundError(ExtensionError):
    """Raised when a name is unknown to both the registry and PATH."""

    pass

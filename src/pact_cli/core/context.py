"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from pact_cli.core.archive import ArchiveExtractor, RealArchiveExtractor
from pact_cli.core.config import ExtensionsConfig, load_extensions_config
from pact_cli.core.http import HttpClient, RealHttpClient
from pact_cli.core.platform import Platform, detect_platform
from pact_cli.core.process import ProcessRunner, RealProcessRunner
from pact_cli.core.registry_store import FilesystemRegistryStore, RegistryStore


@dataclass(frozen=True)
class PactContext:
    """Immutable context holding all dependencies for extension operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    platform: Platform
    config: ExtensionsConfig
    registry_store: RegistryStore
    http: HttpClient
    archive: ArchiveExtractor
    processes: ProcessRunner

    @staticmethod
    def for_test(
        extensions_home: Path,
        *,
        platform: Platform | None = None,
        registry_store: RegistryStore | None = None,
        http: HttpClient | None = None,
        archive: ArchiveExtractor | None = None,
        processes: ProcessRunner | None = None,
        http_timeout: float = 5.0,
    ) -> "PactContext":
        """Create test context rooted at extensions_home.

        Unspecified integrations default to fakes (HTTP, processes) or to the
        real filesystem-backed implementations pointed at extensions_home
        (registry store, archive extraction), which tests drive via tmp_path.

        Args:
            extensions_home: Directory used as the extensions home
            platform: Platform to report. If None, uses linux-x86_64.
            registry_store: If None, uses FilesystemRegistryStore under extensions_home.
            http: If None, uses an empty FakeHttpClient (every request fails).
            archive: If None, uses RealArchiveExtractor.
            processes: If None, uses an empty FakeProcessRunner.
            http_timeout: Timeout recorded in the config.

        Example:
            >>> http = FakeHttpClient(responses={url: HttpResponse(200, b"1.0.0")})
            >>> ctx = PactContext.for_test(tmp_path, http=http)
        """
        from tests.fakes.http import FakeHttpClient
        from tests.fakes.process_runner import FakeProcessRunner

        if platform is None:
            platform = Platform(os="linux", arch="x86_64")

        config = ExtensionsConfig(extensions_home=extensions_home, http_timeout=http_timeout)

        if registry_store is None:
            registry_store = FilesystemRegistryStore(
                config.registry_path, config.bin_dir, platform.executable_suffix
            )

        if http is None:
            http = FakeHttpClient()

        if archive is None:
            archive = RealArchiveExtractor()

        if processes is None:
            processes = FakeProcessRunner()

        return PactContext(
            platform=platform,
            config=config,
            registry_store=registry_store,
            http=http,
            archive=archive,
            processes=processes,
        )


def create_context() -> PactContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.

    Returns:
        PactContext with real implementations for the detected platform

    Raises:
        ValueError: If environment configuration is invalid
    """
    platform = detect_platform()
    config = load_extensions_config()
    return PactContext(
        platform=platform,
        config=config,
        registry_store=FilesystemRegistryStore(
            config.registry_path, config.bin_dir, platform.executable_suffix
        ),
        http=RealHttpClient(timeout=config.http_timeout),
        archive=RealArchiveExtractor(),
        processes=RealProcessRunner(),
    )

"""Extensions configuration loaded from the environment.

Provides immutable configuration resolved once at the CLI entry point and
stored in PactContext.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

EXTENSIONS_HOME_ENV = "PACT_CLI_EXTENSIONS_HOME"
HTTP_TIMEOUT_ENV = "PACT_CLI_HTTP_TIMEOUT"

DEFAULT_HTTP_TIMEOUT = 30.0
LEGACY_DIR_NAME = "pact-legacy"


@dataclass(frozen=True)
class ExtensionsConfig:
    """Immutable extensions configuration.

    All lifecycle paths derive from extensions_home so tests can point the
    whole subsystem at a temporary directory.
    """

    extensions_home: Path
    http_timeout: float

    @property
    def bin_dir(self) -> Path:
        return self.extensions_home / "bin"

    @property
    def registry_path(self) -> Path:
        return self.extensions_home / "config.json"

    @property
    def legacy_dir(self) -> Path:
        return self.extensions_home / LEGACY_DIR_NAME


def load_extensions_config(environ: Mapping[str, str] | None = None) -> ExtensionsConfig:
    """Build config from environment variables.

    A relative PACT_CLI_EXTENSIONS_HOME is made absolute against the current
    directory, since recorded binary paths and symlink targets outlive it.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ExtensionsConfig with home and timeout resolved

    Raises:
        ValueError: If PACT_CLI_HTTP_TIMEOUT is not a positive number
    """
    if environ is None:
        environ = os.environ

    home_value = environ.get(EXTENSIONS_HOME_ENV)
    if home_value:
        extensions_home = Path(home_value).expanduser().resolve()
    else:
        extensions_home = Path.home() / ".pact" / "extensions"

    timeout_value = environ.get(HTTP_TIMEOUT_ENV)
    http_timeout = DEFAULT_HTTP_TIMEOUT
    if timeout_value:
        try:
            http_timeout = float(timeout_value)
        except ValueError:
            raise ValueError(
                f"Invalid {HTTP_TIMEOUT_ENV}={timeout_value!r}: expected a number of seconds"
            ) from None
        if http_timeout <= 0:
            raise ValueError(f"Invalid {HTTP_TIMEOUT_ENV}={timeout_value!r}: must be positive")

    return ExtensionsConfig(extensions_home=extensions_home, http_timeout=http_timeout)

"""Version lookup for each extension family.

Version strings are opaque. Latest-version resolution always queries the
remote source. The version of an installed pactflow-ai binary is read from
the binary itself.
"""

import json
import logging

from pact_cli.core.errors import RemoteStatusError, VersionResolutionError
from pact_cli.core.families import ExtensionFamily
from pact_cli.core.http import HttpClient
from pact_cli.core.platform import Platform, artifact_target
from pact_cli.core.process import ProcessRunner

logger = logging.getLogger(__name__)

USER_AGENT = "pact-cli"
UNKNOWN_VERSION = "unknown"

PACTFLOW_AI_LATEST_URL = "https://download.pactflow.io/ai/dist/{target}/latest"
PACT_STANDALONE_LATEST_URL = (
    "https://api.github.com/repos/pact-foundation/pact-standalone/releases/latest"
)


def latest_version_url(family: ExtensionFamily, platform: Platform) -> str:
    if family is ExtensionFamily.PACTFLOW_AI:
        return PACTFLOW_AI_LATEST_URL.format(target=artifact_target(family, platform))
    return PACT_STANDALONE_LATEST_URL


def resolve_latest_version(http: HttpClient, family: ExtensionFamily, platform: Platform) -> str:
    """Fetch the latest published version of a family.

    pactflow-ai answers with the bare version as the response body. The
    standalone bundle exposes GitHub release metadata whose ``tag_name`` is
    the version.

    Args:
        http: HTTP client used for the lookup
        family: Family to resolve
        platform: Platform used to select the per-target endpoint

    Returns:
        Version string, used verbatim in download URLs

    Raises:
        NetworkError: If the request failed or timed out
        RemoteStatusError: If the endpoint answered with a non-success status
        VersionResolutionError: If the response carries no version
    """
    url = latest_version_url(family, platform)
    response = http.get(url, headers={"User-Agent": USER_AGENT})
    if not response.is_success:
        raise RemoteStatusError(f"Version resolution for {family}", url, response.status_code)

    if family is ExtensionFamily.PACTFLOW_AI:
        version = response.text.strip()
        if not version:
            raise VersionResolutionError(
                f"Version resolution for {family} failed: empty response from {url}"
            )
    else:
        version = _tag_name_from_release(response.content, url)

    logger.debug("Latest %s version: %s", family, version)
    return version


def _tag_name_from_release(content: bytes, url: str) -> str:
    try:
        release = json.loads(content)
    except ValueError as e:
        raise VersionResolutionError(
            f"Version resolution for {ExtensionFamily.PACT_LEGACY} failed: "
            f"invalid release metadata from {url}: {e}"
        ) from e

    tag_name = release.get("tag_name") if isinstance(release, dict) else None
    if not isinstance(tag_name, str) or not tag_name.strip():
        raise VersionResolutionError(
            f"Version resolution for {ExtensionFamily.PACT_LEGACY} failed: "
            f"no tag_name found in release metadata from {url}"
        )
    return tag_name.strip()


def installed_binary_version(processes: ProcessRunner, binary_path: str) -> str:
    """Ask an installed binary for its version.

    ``<binary> --version`` prints ``<name> <version>``; the second token is
    the version.

    Returns:
        The version, or UNKNOWN_VERSION if the binary cannot be run or its
        output has no version token
    """
    try:
        output = processes.capture([binary_path, "--version"])
    except RuntimeError as e:
        logger.debug("Could not read version of %s: %s", binary_path, e)
        return UNKNOWN_VERSION

    tokens = output.split()
    if len(tokens) < 2:
        logger.debug("Unexpected --version output from %s: %r", binary_path, output)
        return UNKNOWN_VERSION
    return tokens[1]

"""Real HTTP operations backed by httpx."""

import logging

import httpx

from pact_cli.core.errors import NetworkError
from pact_cli.core.http.abc import HttpClient, HttpResponse

logger = logging.getLogger(__name__)


class RealHttpClient(HttpClient):
    """httpx-based client with a bounded per-request timeout.

    Redirects are followed because GitHub release downloads redirect to
    object storage.
    """

    def __init__(self, timeout: float, transport: httpx.BaseTransport | None = None) -> None:
        self._timeout = timeout
        self._transport = transport

    def get(self, url: str, headers: dict[str, str] | None = None) -> HttpResponse:
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                timeout=self._timeout, follow_redirects=True, transport=self._transport
            ) as client:
                response = client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request to {url} timed out after {self._timeout:g}s. "
                "Check your connection and retry."
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
        return HttpResponse(status_code=response.status_code, content=response.content)

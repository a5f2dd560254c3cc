"""HTTP operations interface for version lookups and artifact downloads.

This module defines the abstract interface for outbound HTTP, following the
ops pattern with ABC-based dependency injection so lifecycle code can be
tested without network access.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class HttpResponse:
    """Status and body of a completed request."""

    status_code: int
    content: bytes

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class HttpClient(ABC):
    """Abstract interface for HTTP GET requests.

    Implementations never raise on non-success statuses; callers decide how a
    status maps to an error. Transport failures and timeouts raise NetworkError.
    """

    @abstractmethod
    def get(self, url: str, headers: dict[str, str] | None = None) -> HttpResponse:
        """Perform a GET request and read the full body.

        Args:
            url: Absolute URL to request (redirects are followed)
            headers: Extra request headers

        Returns:
            HttpResponse with final status code and body

        Raises:
            NetworkError: If the request failed or timed out
        """
        ...

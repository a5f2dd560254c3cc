"""HTTP operations abstraction for testing."""

from pact_cli.core.http.abc import HttpClient, HttpResponse
from pact_cli.core.http.real import RealHttpClient

__all__ = [
    "HttpClient",
    "HttpResponse",
    "RealHttpClient",
]

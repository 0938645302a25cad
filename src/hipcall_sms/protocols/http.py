"""HTTPClient protocol definition.

The transport port the adapters consume. Runtime failures (connection
refused, DNS, timeout) come back as a TransportFailure value; an invalid URL
is a programming error and raises synchronously.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

DEFAULT_RECEIVE_TIMEOUT = 600_000  # milliseconds

Headers = list[tuple[str, str]]


class HTTPResponse(BaseModel):
    """Response as seen by adapters, independent of the HTTP library."""

    model_config = ConfigDict(frozen=True)

    status: int
    body: bytes = b""
    headers: Headers = []


class TransportFailure(BaseModel):
    """The request never produced an HTTP response."""

    model_config = ConfigDict(frozen=True)

    reason: str


@runtime_checkable
class HTTPClient(Protocol):
    """Protocol for HTTP transports.

    Implementations handle pooling, TLS and timeouts. Examples: HttpxClient,
    MockHTTPClient.
    """

    def request(
        self,
        method: str,
        url: str,
        headers: Headers,
        body: bytes = b"",
        options: dict[str, Any] | None = None,
    ) -> HTTPResponse | TransportFailure:
        """Execute a request.

        Args:
            method: HTTP method ("GET", "POST", ...)
            url: Absolute http(s) URL
            headers: List of (name, value) pairs
            body: Raw request body
            options: Recognized key: receive_timeout (milliseconds, default 600000)

        Returns:
            HTTPResponse, or TransportFailure for network-level errors

        Raises:
            httpx.InvalidURL: If the URL is malformed
        """
        ...

"""HTTP transport implementations."""

import logging
import threading
from typing import Any

import httpx

from hipcall_sms.protocols.http import (
    DEFAULT_RECEIVE_TIMEOUT,
    Headers,
    HTTPResponse,
    TransportFailure,
)

logger = logging.getLogger(__name__)


def check_url(url: str) -> httpx.URL:
    """Parse url, raising httpx.InvalidURL unless it is an absolute http(s) URL."""
    parsed = httpx.URL(url)
    if parsed.scheme not in ("http", "https"):
        raise httpx.InvalidURL(f"Unsupported URL scheme in {url!r}")
    if not parsed.host:
        raise httpx.InvalidURL(f"Missing host in {url!r}")
    return parsed


def failure_reason(exc: httpx.RequestError) -> str:
    """Short, stable reason string for a transport-level error."""
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.ConnectError):
        return f"connect error: {exc}" if str(exc) else "connect error"
    return str(exc) or exc.__class__.__name__


class HttpxClient:
    """Transport backed by a pooled httpx.Client.

    The client is created lazily and reused across requests, so concurrent
    callers share one connection pool.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        """Initialize the transport.

        Args:
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(transport=self._transport)
            return self._client

    def close(self) -> None:
        """Close the HTTP client and release connections."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def request(
        self,
        method: str,
        url: str,
        headers: Headers,
        body: bytes = b"",
        options: dict[str, Any] | None = None,
    ) -> HTTPResponse | TransportFailure:
        parsed = check_url(url)
        timeout_ms = (options or {}).get("receive_timeout", DEFAULT_RECEIVE_TIMEOUT)

        try:
            response = self._get_client().request(
                method.upper(),
                parsed,
                headers=headers,
                content=body or None,
                timeout=httpx.Timeout(timeout_ms / 1000),
            )
        except httpx.RequestError as e:
            reason = failure_reason(e)
            logger.warning("HTTP %s %s failed: %s", method.upper(), parsed.host, reason)
            return TransportFailure(reason=reason)

        return HTTPResponse(
            status=response.status_code,
            body=response.content,
            headers=list(response.headers.multi_items()),
        )

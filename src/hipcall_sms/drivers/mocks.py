"""Mock implementations for testing.

Provides an in-memory HTTPClient that can be used in tests without network
side effects.
"""

import json
from collections import deque
from collections.abc import Callable
from typing import Any

from hipcall_sms.drivers.http import check_url
from hipcall_sms.protocols.http import (
    Headers,
    HTTPClient,
    HTTPResponse,
    TransportFailure,
)

Handler = Callable[..., HTTPResponse | TransportFailure]


def json_response(
    status: int,
    payload: Any,
    headers: Headers | None = None,
) -> HTTPResponse:
    """Build an HTTPResponse with a JSON-encoded body."""
    return HTTPResponse(
        status=status,
        body=json.dumps(payload).encode("utf-8"),
        headers=headers if headers is not None else [("content-type", "application/json")],
    )


class MockHTTPClient:
    """Mock transport for testing.

    Records all calls without touching the network. Each call is answered by,
    in order of preference: the next queued handler or response, then the
    default response.
    """

    def __init__(self, response: HTTPResponse | TransportFailure | None = None) -> None:
        """Initialize with a default response.

        Args:
            response: Returned when nothing is queued. Defaults to an empty 200.
        """
        self.response = response or HTTPResponse(status=200, body=b"{}")
        self.calls: list[dict[str, Any]] = []
        self._queue: deque[Handler | HTTPResponse | TransportFailure] = deque()

    def request(
        self,
        method: str,
        url: str,
        headers: Headers,
        body: bytes = b"",
        options: dict[str, Any] | None = None,
    ) -> HTTPResponse | TransportFailure:
        """Record the call and return the next configured answer."""
        check_url(url)
        call = {
            "method": method,
            "url": url,
            "headers": list(headers),
            "body": body,
            "options": dict(options or {}),
        }
        self.calls.append(call)

        if not self._queue:
            return self.response

        answer = self._queue.popleft()
        if callable(answer):
            return answer(**call)
        return answer

    def expect(self, handler: Handler) -> None:
        """Answer the next call with handler(method=, url=, headers=, body=, options=)."""
        self._queue.append(handler)

    def enqueue(self, response: HTTPResponse | TransportFailure) -> None:
        """Answer the next call with a fixed response."""
        self._queue.append(response)

    def set_response(self, response: HTTPResponse | TransportFailure) -> None:
        """Change the default response for subsequent calls."""
        self.response = response

    @property
    def last_call(self) -> dict[str, Any]:
        """The most recent recorded call."""
        if not self.calls:
            raise AssertionError("No HTTP requests were made")
        return self.calls[-1]

    @property
    def pending(self) -> int:
        """Number of queued answers not yet consumed."""
        return len(self._queue)


# Verify protocol compliance at import time
assert isinstance(MockHTTPClient(), HTTPClient)

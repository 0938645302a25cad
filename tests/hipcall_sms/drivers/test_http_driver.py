"""Tests for the httpx transport driver."""

import json
import threading

import httpx
import pytest

from hipcall_sms.drivers.http import HttpxClient, check_url, failure_reason
from hipcall_sms.protocols.http import HTTPClient, HTTPResponse, TransportFailure


def make_client(handler) -> HttpxClient:
    return HttpxClient(transport=httpx.MockTransport(handler))


class TestHttpxClient:
    """Tests for HttpxClient.request."""

    def test_is_http_client(self):
        assert isinstance(HttpxClient(), HTTPClient)

    def test_returns_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={"ok": True}, headers={"x-request-id": "abc"})

        response = make_client(handler).request("POST", "https://api.example.com/x", [])
        assert isinstance(response, HTTPResponse)
        assert response.status == 201
        assert json.loads(response.body) == {"ok": True}
        assert ("x-request-id", "abc") in response.headers

    def test_keeps_repeated_headers(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers=[("set-cookie", "a=1"), ("set-cookie", "b=2")])

        response = make_client(handler).request("GET", "https://api.example.com/x", [])
        cookies = [value for name, value in response.headers if name == "set-cookie"]
        assert cookies == ["a=1", "b=2"]

    def test_concurrent_first_use_shares_client(self):
        client = make_client(lambda request: httpx.Response(200))
        barrier = threading.Barrier(8)
        seen = []

        def first_use():
            barrier.wait()
            seen.append(client._get_client())

        workers = [threading.Thread(target=first_use) for _ in range(8)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        assert len({id(c) for c in seen}) == 1
        client.close()

    def test_sends_method_headers_and_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["auth"] = request.headers["authorization"]
            seen["body"] = request.content
            return httpx.Response(200)

        make_client(handler).request(
            "post",
            "https://api.example.com/x",
            [("Authorization", "Bearer KEY")],
            b"payload",
        )
        assert seen == {"method": "POST", "auth": "Bearer KEY", "body": b"payload"}

    def test_converts_timeout_to_seconds(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["timeout"] = request.extensions["timeout"]
            return httpx.Response(200)

        make_client(handler).request(
            "GET", "https://api.example.com/x", [], options={"receive_timeout": 2500}
        )
        assert seen["timeout"]["read"] == 2.5

    def test_default_timeout(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["timeout"] = request.extensions["timeout"]
            return httpx.Response(200)

        make_client(handler).request("GET", "https://api.example.com/x", [])
        assert seen["timeout"]["read"] == 600.0

    def test_timeout_becomes_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        result = make_client(handler).request("GET", "https://api.example.com/x", [])
        assert result == TransportFailure(reason="timeout")

    def test_connect_error_becomes_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = make_client(handler).request("GET", "https://api.example.com/x", [])
        assert isinstance(result, TransportFailure)
        assert result.reason == "connect error: connection refused"

    def test_invalid_url_raises(self):
        client = make_client(lambda request: httpx.Response(200))
        with pytest.raises(httpx.InvalidURL):
            client.request("GET", "ftp://example.com/file", [])

    def test_close_is_idempotent(self):
        client = make_client(lambda request: httpx.Response(200))
        client.request("GET", "https://api.example.com/x", [])
        client.close()
        client.close()


class TestHelpers:
    """Tests for module helpers."""

    def test_check_url_accepts_https(self):
        assert check_url("https://api.telnyx.com/v2/messages").host == "api.telnyx.com"

    def test_check_url_rejects_missing_host(self):
        with pytest.raises(httpx.InvalidURL):
            check_url("/relative/path")

    def test_failure_reason_generic(self):
        exc = httpx.RemoteProtocolError("peer closed connection")
        assert failure_reason(exc) == "peer closed connection"

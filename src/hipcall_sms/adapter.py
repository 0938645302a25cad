"""Adapter contract and shared adapter helpers.

Every provider adapter implements SMSAdapter. Concrete adapters subclass
BaseAdapter and only declare their requirements:

    class MyAdapter(BaseAdapter):
        name = "my_provider"
        required_config = ["api_key"]
        required_deps = ["httpx"]

        def deliver(self, sms, config):
            ...

BaseAdapter forwards validate_config/validate_dependency to the module-level
helpers and provides the request/response plumbing shared by the HTTP
adapters: config fallback, provider option lookup, default headers, transport
selection and response normalization.
"""

import importlib.util
import json
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Protocol, runtime_checkable

from hipcall_sms.config import get_config_value
from hipcall_sms.drivers.http import HttpxClient
from hipcall_sms.exceptions import MissingConfigError
from hipcall_sms.protocols.http import (
    DEFAULT_RECEIVE_TIMEOUT,
    Headers,
    HTTPClient,
    HTTPResponse,
    TransportFailure,
)
from hipcall_sms.results import INVALID_JSON, ErrorKind, ErrorRecord, Result
from hipcall_sms.sms import SMS
from hipcall_sms.version import USER_AGENT

logger = logging.getLogger(__name__)

Dependency = str | tuple[str, str]

_default_http_client: HttpxClient | None = None
_default_http_client_lock = threading.Lock()


@runtime_checkable
class SMSAdapter(Protocol):
    """Protocol for SMS provider adapters."""

    name: str

    def deliver(self, sms: SMS, config: dict[str, Any]) -> Result:
        """Deliver one SMS using the given config."""
        ...

    def get_balance(self, config: dict[str, Any]) -> Result:
        """Fetch the account balance, or a NOT_SUPPORTED error record."""
        ...

    def validate_config(self, config: Mapping[str, Any]) -> None:
        """Raise MissingConfigError unless every required key is set."""
        ...

    def validate_dependency(self) -> list[Dependency]:
        """Return the required dependencies that cannot be imported."""
        ...


# Generic validation


def validate_config(required_config: list[str], config: Mapping[str, Any]) -> None:
    """Check that every required key is present and not None/empty.

    Raises:
        MissingConfigError: Listing every missing key, not just the first
    """
    missing = [key for key in required_config if config.get(key) in (None, "")]
    if missing:
        raise MissingConfigError(missing, dict(config))


def _is_importable(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        # Parent package of a dotted name is missing
        return False


def validate_dependency(required_deps: list[Dependency]) -> list[Dependency]:
    """Return the entries of required_deps whose module cannot be imported.

    Entries are module names ("httpx", "pydantic.main") or
    (distribution, module) tuples. An empty list means every dependency is
    available.
    """
    missing: list[Dependency] = []
    for dep in required_deps:
        module = dep[1] if isinstance(dep, tuple) else dep
        if not _is_importable(module):
            missing.append(dep)
    return missing


# Transport selection


def get_http_client() -> HTTPClient:
    """Return the configured transport.

    Uses the process-wide "http_client" setting when present, otherwise a
    shared HttpxClient created on first use.
    """
    global _default_http_client
    client = get_config_value("http_client")
    if client is not None:
        return client
    with _default_http_client_lock:
        if _default_http_client is None:
            _default_http_client = HttpxClient()
        return _default_http_client


def decode_json(body: bytes) -> tuple[bool, Any]:
    """Decode a JSON body, returning (ok, value)."""
    try:
        return True, json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return False, None


def _body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


class BaseAdapter:
    """Shared implementation for adapters.

    Subclasses set ``name``, ``required_config`` and ``required_deps`` and
    implement ``deliver``. ``get_balance`` defaults to a NOT_SUPPORTED error.
    """

    name: ClassVar[str] = ""
    required_config: ClassVar[list[str]] = []
    required_deps: ClassVar[list[Dependency]] = []

    def deliver(self, sms: SMS, config: dict[str, Any]) -> Result:
        raise NotImplementedError

    def get_balance(self, config: dict[str, Any]) -> Result:
        return Result.failure(
            ErrorRecord.not_supported(
                "Balance checking not supported",
                f"The {self.name} adapter does not support balance checking.",
                self.name,
            )
        )

    def validate_config(self, config: Mapping[str, Any]) -> None:
        validate_config(self.required_config, config)

    def validate_dependency(self) -> list[Dependency]:
        return validate_dependency(self.required_deps)

    # Config and options

    @staticmethod
    def config_value(config: Mapping[str, Any], key: str, setting: str) -> Any:
        """Read key from call config, falling back to the process-wide setting."""
        value = config.get(key)
        if value in (None, ""):
            value = get_config_value(setting)
        return value

    def require(self, key: str, value: Any, config: Mapping[str, Any]) -> None:
        """Fail fast, before any request is built, when value is unset."""
        if value in (None, ""):
            raise MissingConfigError(
                [key],
                dict(config),
                message=f"{key} is required for {self.display_name} adapter",
            )

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @staticmethod
    def option(sms: SMS, config: Mapping[str, Any], key: str, default: Any = None) -> Any:
        """Look up key in provider_options, then config, then default.

        Only None counts as absent, so an explicit False or 0 is kept.
        """
        value = sms.provider_options.get(key)
        if value is None:
            value = config.get(key)
        return default if value is None else value

    # Request plumbing

    @staticmethod
    def default_headers() -> Headers:
        return [
            ("User-Agent", USER_AGENT),
            ("Accept", "application/json"),
        ]

    @staticmethod
    def receive_timeout(config: Mapping[str, Any]) -> int:
        timeout = config.get("receive_timeout")
        if timeout is None:
            timeout = get_config_value("timeout", DEFAULT_RECEIVE_TIMEOUT)
        return timeout

    def request(
        self,
        method: str,
        url: str,
        headers: Headers,
        body: bytes,
        config: Mapping[str, Any],
    ) -> HTTPResponse | TransportFailure:
        logger.debug("%s %s via %s", method, url, self.name)
        return get_http_client().request(
            method,
            url,
            headers,
            body,
            {"receive_timeout": self.receive_timeout(config)},
        )

    def handle_response(
        self,
        response: HTTPResponse | TransportFailure,
        normalize: Callable[[Any], Any],
        is_success: Callable[[int], bool] = lambda status: status == 200,
    ) -> Result:
        """Turn a transport answer into a Result.

        Success statuses with valid JSON are passed to normalize. Everything
        else becomes an ErrorRecord: TRANSPORT for network failures, DECODE
        when the body is not JSON, HTTP for other non-success statuses.
        """
        if isinstance(response, TransportFailure):
            logger.warning("%s request failed: %s", self.name, response.reason)
            return Result.failure(ErrorRecord.transport(response.reason, self.name))

        valid, decoded = decode_json(response.body)

        if not valid:
            logger.warning("%s returned invalid JSON (status %d)", self.name, response.status)
            return Result.failure(
                ErrorRecord(
                    kind=ErrorKind.DECODE,
                    provider=self.name,
                    error=INVALID_JSON,
                    status=response.status,
                    body=_body_text(response.body),
                    headers=response.headers,
                )
            )

        if is_success(response.status):
            return Result.success(normalize(decoded))

        logger.warning("%s returned HTTP %d", self.name, response.status)
        return Result.failure(
            ErrorRecord(
                kind=ErrorKind.HTTP,
                provider=self.name,
                status=response.status,
                body=decoded,
                headers=response.headers,
            )
        )

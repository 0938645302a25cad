"""Normalized results returned by adapters and the facade.

Every delivery or balance call returns a Result. Success carries a
DeliveryResponse or BalanceResponse; failure carries an ErrorRecord whose
``kind`` tells the failure classes apart:

- TRANSPORT: connection refused, DNS failure, timeout
- HTTP: provider answered with a non-success status
- DECODE: provider body was not valid JSON
- NOT_SUPPORTED: the adapter lacks the capability (e.g. Twilio balance)
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from hipcall_sms.exceptions import DeliveryFailedError

INVALID_JSON = "Invalid JSON response"


class ErrorKind(str, Enum):
    """Failure class of an ErrorRecord."""

    TRANSPORT = "transport"
    HTTP = "http"
    DECODE = "decode"
    NOT_SUPPORTED = "not_supported"


class ErrorRecord(BaseModel):
    """Structured description of a failed provider call."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    provider: str | None = None
    error: Any = None
    message: str | None = None
    status: int | None = None
    body: Any = None
    headers: list[tuple[str, str]] | None = None

    @classmethod
    def transport(cls, reason: Any, provider: str) -> "ErrorRecord":
        return cls(kind=ErrorKind.TRANSPORT, error=reason, provider=provider)

    @classmethod
    def not_supported(cls, error: str, message: str, provider: str) -> "ErrorRecord":
        return cls(kind=ErrorKind.NOT_SUPPORTED, error=error, message=message, provider=provider)


class DeliveryResponse(BaseModel):
    """Uniform delivery response, regardless of provider."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    status: str | None = None
    provider: str
    provider_response: Any = None


class BalanceResponse(BaseModel):
    """Uniform balance response.

    Only ``balance``, ``currency``, ``provider`` and ``provider_response`` are
    common to all providers; the rest are filled where the provider reports them.
    """

    model_config = ConfigDict(frozen=True)

    balance: Any = None
    currency: str | None = None
    provider: str
    provider_response: Any = None
    credit_limit: Any = None
    available_credit: Any = None
    pending: Any = None
    sms_balance: Any = None


class Result(BaseModel):
    """Outcome of a single adapter call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = None
    error: ErrorRecord | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorRecord) -> "Result":
        return cls(error=error)

    def unwrap(self) -> Any:
        """Return the value, raising DeliveryFailedError on failure."""
        if self.error is not None:
            raise DeliveryFailedError(self.error)
        return self.value

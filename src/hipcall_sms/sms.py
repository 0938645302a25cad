"""SMS message model.

Defines the SMS value object and the builder methods for composing one. The
model is frozen; every builder method returns a new SMS, so a message can be
shared and extended without being changed under anyone's feet.

Usage:
    sms = (
        SMS.new()
        .with_from("+15551234567")
        .with_to("+15555555555")
        .with_text("Welcome to the Hipcall")
    )

    # Keyword construction ("from" is reserved in Python, use from_)
    sms = SMS.new(from_="+15551234567", to="+15555555555", text="Welcome!")

    # Provider-specific extras
    sms = sms.put_provider_option("webhook_url", "https://example.com/webhook")

No field is validated for presence here. Adapters check what they need at
delivery time.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Direction of an SMS relative to this library."""

    OUTBOUND = "outbound"
    INBOUND = "inbound"


class SMS(BaseModel):
    """A single SMS/MMS message.

    Attributes:
        id: Optional identifier, caller- or provider-assigned
        direction: Always outbound for messages this library sends
        from_: Sender number or alphanumeric sender ID (alias "from")
        to: Recipient number
        text: Plain text body, empty string allowed
        provider_options: Values specific to one provider, ignored by others
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = None
    direction: Direction = Direction.OUTBOUND
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    text: str | None = None
    provider_options: dict[Any, Any] = Field(default_factory=dict)

    @classmethod
    def new(cls, **attrs: Any) -> "SMS":
        """Build an SMS from keyword attributes."""
        return cls(**attrs)

    def with_from(self, value: str) -> "SMS":
        return self.model_copy(update={"from_": value})

    def with_to(self, value: str) -> "SMS":
        return self.model_copy(update={"to": value})

    def with_text(self, value: str) -> "SMS":
        return self.model_copy(update={"text": value})

    def with_provider_options(self, options: Mapping[Any, Any]) -> "SMS":
        """Replace all provider options."""
        return self.model_copy(update={"provider_options": dict(options)})

    def put_provider_option(self, key: Any, value: Any) -> "SMS":
        """Add or overwrite a single provider option, keeping the others."""
        return self.model_copy(
            update={"provider_options": {**self.provider_options, key: value}}
        )

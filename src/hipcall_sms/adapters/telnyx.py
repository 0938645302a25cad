"""Telnyx adapter.

Delivers SMS/MMS through the Telnyx Messages API and reads the account
balance from the Balance API.

Configuration:
- api_key: Telnyx API key (falls back to the "telnyx_api_key" setting)

Provider options (each also read from config when absent on the message):
- messaging_profile_id, webhook_url, webhook_failover_url
- use_profile_webhooks (default True)
- type ("SMS" or "MMS", default "SMS")
- auto_detect, media_urls

Reference: https://developers.telnyx.com/api/messaging/send-message
"""

import json
import logging
from typing import Any, ClassVar

from hipcall_sms.adapter import BaseAdapter
from hipcall_sms.protocols.http import Headers
from hipcall_sms.results import BalanceResponse, DeliveryResponse, Result
from hipcall_sms.sms import SMS

logger = logging.getLogger(__name__)

API_ENDPOINT = "https://api.telnyx.com/v2/messages"
BALANCE_ENDPOINT = "https://api.telnyx.com/v2/balance"

OPTIONAL_FIELDS = (
    "messaging_profile_id",
    "webhook_url",
    "webhook_failover_url",
    "auto_detect",
    "media_urls",
)


class TelnyxAdapter(BaseAdapter):
    """Adapter for the Telnyx v2 REST API."""

    name: ClassVar[str] = "telnyx"
    required_config: ClassVar[list[str]] = ["api_key"]
    required_deps: ClassVar[list] = ["httpx"]

    def deliver(self, sms: SMS, config: dict[str, Any]) -> Result:
        """Send an SMS through Telnyx.

        Returns:
            Result with a DeliveryResponse whose id is ``data.id`` and whose
            status is the status of the first recipient.
        """
        api_key = self._api_key(config)
        body = json.dumps(self.prepare_body(sms, config)).encode("utf-8")

        response = self.request("POST", API_ENDPOINT, self.prepare_headers(api_key), body, config)
        result = self.handle_response(response, self.normalize_response)
        if result.ok:
            logger.info("Telnyx accepted message %s (%s)", result.value.id, result.value.status)
        return result

    def get_balance(self, config: dict[str, Any]) -> Result:
        """Fetch balance, credit limit, available credit and pending amount."""
        api_key = self._api_key(config)

        response = self.request("GET", BALANCE_ENDPOINT, self.prepare_headers(api_key), b"", config)
        return self.handle_response(response, self.normalize_balance_response)

    def _api_key(self, config: dict[str, Any]) -> str:
        api_key = self.config_value(config, "api_key", "telnyx_api_key")
        self.require("api_key", api_key, config)
        return api_key

    def prepare_headers(self, api_key: str) -> Headers:
        return [
            *self.default_headers(),
            ("Content-Type", "application/json"),
            ("Authorization", f"Bearer {api_key}"),
        ]

    def prepare_body(self, sms: SMS, config: dict[str, Any]) -> dict[str, Any]:
        body: dict[str, Any] = {
            "from": sms.from_,
            "to": sms.to,
            "text": sms.text,
            "type": self.option(sms, config, "type", "SMS"),
            "use_profile_webhooks": self.option(sms, config, "use_profile_webhooks", True),
        }

        for field in OPTIONAL_FIELDS:
            value = self.option(sms, config, field)
            if value is not None:
                body[field] = value

        return body

    def normalize_response(self, payload: Any) -> DeliveryResponse:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            return DeliveryResponse(status="unknown", provider=self.name, provider_response=payload)

        recipients = data.get("to")
        first = recipients[0] if isinstance(recipients, list) and recipients else None
        status = first.get("status", "unknown") if isinstance(first, dict) else "unknown"
        return DeliveryResponse(
            id=data.get("id"),
            status=status,
            provider=self.name,
            provider_response=data,
        )

    def normalize_balance_response(self, payload: Any) -> BalanceResponse:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            return BalanceResponse(provider=self.name, provider_response=payload)

        return BalanceResponse(
            balance=data.get("balance"),
            currency=data.get("currency"),
            credit_limit=data.get("credit_limit"),
            available_credit=data.get("available_credit"),
            pending=data.get("pending"),
            provider=self.name,
            provider_response=data,
        )

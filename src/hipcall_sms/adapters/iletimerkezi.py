"""Iletimerkezi adapter.

Delivers SMS through the Iletimerkezi JSON API, a Turkish SMS provider with
scheduled sending and IYS (Izinli Yollama Sistemi) compliance fields.
Credentials travel inside the JSON body rather than in headers.

Configuration:
- key: API key (falls back to "iletimerkezi_key")
- hash: API hash (falls back to "iletimerkezi_hash")

Provider options:
- send_date_time: schedule, e.g. ["2024", "12", "25", "10", "30"] (default [])
- iys: IYS flag (default "1")
- iys_list: IYS list type, "BIREYSEL" or "TACIR" (default "BIREYSEL")

The API can answer HTTP 200 while reporting a business failure in
``response.status.code``; such deliveries succeed at the Result level with
status "failed".

Reference: https://www.toplusmsapi.com/sms/gonder/json
"""

import json
import logging
from typing import Any, ClassVar

from hipcall_sms.adapter import BaseAdapter
from hipcall_sms.protocols.http import Headers
from hipcall_sms.results import BalanceResponse, DeliveryResponse, Result
from hipcall_sms.sms import SMS

logger = logging.getLogger(__name__)

API_ENDPOINT = "https://api.iletimerkezi.com/v1/send-sms/json"
BALANCE_ENDPOINT = "https://api.iletimerkezi.com/v1/get-balance/json"

DEFAULT_IYS = "1"
DEFAULT_IYS_LIST = "BIREYSEL"
CURRENCY = "TRY"


def _dig(payload: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(payload, dict):
            return None
        payload = payload.get(key)
    return payload


class IletimerkeziAdapter(BaseAdapter):
    """Adapter for the Iletimerkezi v1 JSON API."""

    name: ClassVar[str] = "iletimerkezi"
    required_config: ClassVar[list[str]] = ["key", "hash"]
    required_deps: ClassVar[list] = ["httpx"]

    def deliver(self, sms: SMS, config: dict[str, Any]) -> Result:
        """Send an SMS through Iletimerkezi.

        Status is derived from the embedded response code: "200" maps to
        "queued", anything else to "failed".
        """
        authentication = self._authentication(config)
        body = json.dumps(self.prepare_body(sms, config, authentication)).encode("utf-8")

        response = self.request("POST", API_ENDPOINT, self.prepare_headers(), body, config)
        result = self.handle_response(response, self.normalize_response)
        if result.ok:
            logger.info("Iletimerkezi order %s (%s)", result.value.id, result.value.status)
        return result

    def get_balance(self, config: dict[str, Any]) -> Result:
        """Fetch the monetary and SMS-count balance."""
        authentication = self._authentication(config)
        body = json.dumps({"request": {"authentication": authentication}}).encode("utf-8")

        response = self.request("POST", BALANCE_ENDPOINT, self.prepare_headers(), body, config)
        return self.handle_response(response, self.normalize_balance_response)

    def _authentication(self, config: dict[str, Any]) -> dict[str, str]:
        key = self.config_value(config, "key", "iletimerkezi_key")
        hash_ = self.config_value(config, "hash", "iletimerkezi_hash")
        self.require("key", key, config)
        self.require("hash", hash_, config)
        return {"key": key, "hash": hash_}

    def prepare_headers(self) -> Headers:
        return [*self.default_headers(), ("Content-Type", "application/json")]

    def prepare_body(
        self,
        sms: SMS,
        config: dict[str, Any],
        authentication: dict[str, str],
    ) -> dict[str, Any]:
        return {
            "request": {
                "authentication": authentication,
                "order": {
                    "sender": sms.from_,
                    "sendDateTime": self.option(sms, config, "send_date_time", []),
                    "iys": self.option(sms, config, "iys", DEFAULT_IYS),
                    "iysList": self.option(sms, config, "iys_list", DEFAULT_IYS_LIST),
                    "message": {
                        "text": sms.text,
                        # Field name as spelled by the provider API
                        "receipents": {"number": [sms.to]},
                    },
                },
            }
        }

    def normalize_response(self, payload: Any) -> DeliveryResponse:
        code = _dig(payload, "response", "status", "code")
        return DeliveryResponse(
            id=_dig(payload, "response", "order", "id"),
            status="queued" if code == "200" else "failed",
            provider=self.name,
            provider_response=payload,
        )

    def normalize_balance_response(self, payload: Any) -> BalanceResponse:
        balance = _dig(payload, "response", "balance")
        return BalanceResponse(
            balance=_dig(balance, "amount"),
            sms_balance=_dig(balance, "sms"),
            currency=CURRENCY,
            provider=self.name,
            provider_response=payload,
        )

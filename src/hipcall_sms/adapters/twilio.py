"""Twilio adapter.

Delivers SMS/MMS through the Twilio Programmable Messaging API.

Configuration:
- account_sid: Twilio account SID (falls back to "twilio_account_sid")
- auth_token: Twilio auth token (falls back to "twilio_auth_token")

Provider options (each also read from config when absent on the message),
sent as the matching Twilio form field:
    messaging_service_sid, status_callback, application_sid, max_price,
    provide_feedback, attempt, validity_period, force_delivery,
    content_retention, address_retention, smart_encoded, persistent_action,
    shorten_urls, schedule_type, send_at, send_as_mms, content_variables,
    risk_check, media_url

Twilio has no simple balance endpoint; get_balance always reports
NOT_SUPPORTED.

Reference: https://www.twilio.com/docs/messaging/api/message-resource#create-a-message-resource
"""

import base64
import json
import logging
from datetime import datetime
from typing import Any, ClassVar
from urllib.parse import urlencode

from hipcall_sms.adapter import BaseAdapter
from hipcall_sms.protocols.http import Headers
from hipcall_sms.results import DeliveryResponse, ErrorRecord, Result
from hipcall_sms.sms import SMS

logger = logging.getLogger(__name__)

API_ENDPOINT = "https://api.twilio.com/2010-04-01/Accounts"

BALANCE_NOT_SUPPORTED = "Balance checking not supported"
BALANCE_NOT_SUPPORTED_MESSAGE = (
    "Twilio does not provide a simple balance endpoint. "
    "Please check your Twilio Console for account balance information."
)

# provider option -> form field, in request order
OPTIONAL_PARAMS = (
    ("messaging_service_sid", "MessagingServiceSid"),
    ("status_callback", "StatusCallback"),
    ("application_sid", "ApplicationSid"),
    ("max_price", "MaxPrice"),
    ("provide_feedback", "ProvideFeedback"),
    ("attempt", "Attempt"),
    ("validity_period", "ValidityPeriod"),
    ("force_delivery", "ForceDelivery"),
    ("content_retention", "ContentRetention"),
    ("address_retention", "AddressRetention"),
    ("smart_encoded", "SmartEncoded"),
    ("persistent_action", "PersistentAction"),
    ("shorten_urls", "ShortenUrls"),
    ("schedule_type", "ScheduleType"),
    ("send_at", "SendAt"),
    ("send_as_mms", "SendAsMms"),
    ("content_variables", "ContentVariables"),
    ("risk_check", "RiskCheck"),
    ("media_url", "MediaUrl"),
)


def form_value(value: Any) -> str:
    """Render a value the way Twilio's form API expects it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


class TwilioAdapter(BaseAdapter):
    """Adapter for the Twilio 2010-04-01 REST API."""

    name: ClassVar[str] = "twilio"
    required_config: ClassVar[list[str]] = ["account_sid", "auth_token"]
    required_deps: ClassVar[list] = ["httpx"]

    def deliver(self, sms: SMS, config: dict[str, Any]) -> Result:
        """Send an SMS through Twilio.

        Any 2xx status counts as success, since message creation answers 201.
        """
        account_sid = self.config_value(config, "account_sid", "twilio_account_sid")
        auth_token = self.config_value(config, "auth_token", "twilio_auth_token")
        self.require("account_sid", account_sid, config)
        self.require("auth_token", auth_token, config)

        url = f"{API_ENDPOINT}/{account_sid}/Messages.json"
        body = self.prepare_body(sms, config).encode("utf-8")

        response = self.request("POST", url, self.prepare_headers(account_sid, auth_token), body, config)
        result = self.handle_response(
            response,
            self.normalize_response,
            is_success=lambda status: 200 <= status <= 299,
        )
        if result.ok:
            logger.info("Twilio accepted message %s (%s)", result.value.id, result.value.status)
        return result

    def get_balance(self, config: dict[str, Any]) -> Result:
        return Result.failure(
            ErrorRecord.not_supported(BALANCE_NOT_SUPPORTED, BALANCE_NOT_SUPPORTED_MESSAGE, self.name)
        )

    def prepare_headers(self, account_sid: str, auth_token: str) -> Headers:
        credentials = base64.b64encode(f"{account_sid}:{auth_token}".encode()).decode("ascii")
        return [
            *self.default_headers(),
            ("Content-Type", "application/x-www-form-urlencoded"),
            ("Authorization", f"Basic {credentials}"),
        ]

    def prepare_body(self, sms: SMS, config: dict[str, Any]) -> str:
        params: list[tuple[str, str]] = [
            ("To", form_value(sms.to)),
            ("Body", form_value(sms.text)),
        ]
        if sms.from_ is not None:
            params.append(("From", sms.from_))

        for option, field in OPTIONAL_PARAMS:
            value = self.option(sms, config, option)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                params.extend((field, form_value(item)) for item in value)
            else:
                params.append((field, form_value(value)))

        return urlencode(params)

    def normalize_response(self, payload: Any) -> DeliveryResponse:
        data = payload if isinstance(payload, dict) else {}
        return DeliveryResponse(
            id=data.get("sid"),
            status=data.get("status"),
            provider=self.name,
            provider_response=payload,
        )

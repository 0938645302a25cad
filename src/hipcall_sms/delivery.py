"""Delivery facade.

Resolves the adapter for a call, merges process-wide settings with per-call
overrides, validates the result and hands the message to the adapter.

Usage:
    from hipcall_sms import SMS, config, deliver

    config.put_env("adapter", "telnyx")
    config.put_env("telnyx_api_key", config.env("TELNYX_API_KEY"))

    result = deliver(SMS.new(from_="+15551234567", to="+15555555555", text="Hi"))
    if result.ok:
        print(result.value.id)

    # Per-call overrides win over process-wide settings
    deliver(sms, {"adapter": "twilio", "account_sid": "AC...", "auth_token": "..."})
"""

import logging
from collections.abc import Mapping
from typing import Any

from hipcall_sms.adapter import SMSAdapter
from hipcall_sms.adapters import get_adapter_class
from hipcall_sms.config import get_config_value
from hipcall_sms.exceptions import AdapterNotConfiguredError, UnknownAdapterError
from hipcall_sms.results import Result
from hipcall_sms.sms import SMS

logger = logging.getLogger(__name__)

# adapter name -> [(adapter config key, process-wide setting)]
BASE_CONFIG_KEYS: dict[str, list[tuple[str, str]]] = {
    "telnyx": [("api_key", "telnyx_api_key")],
    "twilio": [
        ("account_sid", "twilio_account_sid"),
        ("auth_token", "twilio_auth_token"),
    ],
    "iletimerkezi": [
        ("key", "iletimerkezi_key"),
        ("hash", "iletimerkezi_hash"),
    ],
}


def resolve_adapter(adapter: Any) -> SMSAdapter:
    """Turn a registered name, adapter class or adapter instance into an instance.

    Raises:
        AdapterNotConfiguredError: If adapter is None or empty
        UnknownAdapterError: If adapter is an unregistered name or not an adapter
    """
    if adapter is None or adapter == "":
        raise AdapterNotConfiguredError()
    if isinstance(adapter, str):
        return get_adapter_class(adapter)()
    if isinstance(adapter, type):
        instance = adapter()
        if isinstance(instance, SMSAdapter):
            return instance
        raise UnknownAdapterError(adapter)
    if isinstance(adapter, SMSAdapter):
        return adapter
    raise UnknownAdapterError(adapter)


def base_config(adapter: SMSAdapter) -> dict[str, Any]:
    """Read the process-wide settings an adapter uses, leaving unset ones out."""
    config: dict[str, Any] = {}
    for key, setting in BASE_CONFIG_KEYS.get(adapter.name, []):
        value = get_config_value(setting)
        if value is not None:
            config[key] = value
    return config


def _prepare(overrides: Mapping[str, Any] | None) -> tuple[SMSAdapter, dict[str, Any]]:
    overrides = dict(overrides or {})
    selected = overrides.pop("adapter", None)
    if selected is None:
        selected = get_config_value("adapter")

    adapter = resolve_adapter(selected)
    config = {**base_config(adapter), **overrides}
    adapter.validate_config(config)
    return adapter, config


def deliver(sms: SMS, config: Mapping[str, Any] | None = None) -> Result:
    """Deliver an SMS through the configured adapter.

    Args:
        sms: Message to send
        config: Per-call overrides, may include "adapter"

    Returns:
        Result with a DeliveryResponse, or an ErrorRecord for provider failures

    Raises:
        TypeError: If sms is not an SMS
        ConfigurationError: For any adapter or configuration problem
    """
    if not isinstance(sms, SMS):
        raise TypeError(f"deliver() expects an SMS, got {type(sms).__name__}")

    adapter, merged = _prepare(config)
    logger.debug("Delivering SMS via %s", adapter.name)
    return adapter.deliver(sms, merged)


def get_balance(config: Mapping[str, Any] | None = None) -> Result:
    """Fetch the account balance through the configured adapter."""
    adapter, merged = _prepare(config)
    logger.debug("Fetching balance via %s", adapter.name)
    return adapter.get_balance(merged)


def send(
    from_: str | None,
    to: str | None,
    text: str | None,
    config: Mapping[str, Any] | None = None,
) -> Result:
    """Build an outbound SMS and deliver it."""
    return deliver(SMS.new(from_=from_, to=to, text=text), config)


send_sms = send

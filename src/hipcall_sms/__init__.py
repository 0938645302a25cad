"""hipcall_sms - Vendor-agnostic SMS delivery.

Build a message once and deliver it through Telnyx, Twilio, Iletimerkezi or
the in-process Test adapter.

Usage:
    from hipcall_sms import SMS, config, deliver

    config.put_env("adapter", "telnyx")
    config.put_env("telnyx_api_key", config.env("TELNYX_API_KEY"))

    sms = (
        SMS.new()
        .with_from("+15551234567")
        .with_to("+15555555555")
        .with_text("Welcome to the Hipcall")
    )
    result = deliver(sms)

    # Shortcut
    from hipcall_sms import send
    send("+15551234567", "+15555555555", "Hello!")
"""

from hipcall_sms import config
from hipcall_sms.adapter import BaseAdapter, SMSAdapter
from hipcall_sms.adapters import (
    ADAPTERS,
    IletimerkeziAdapter,
    Mailbox,
    TelnyxAdapter,
    TestAdapter,
    TwilioAdapter,
    capture_sms,
)
from hipcall_sms.delivery import deliver, get_balance, resolve_adapter, send, send_sms
from hipcall_sms.exceptions import (
    AdapterNotConfiguredError,
    ConfigurationError,
    DeliveryFailedError,
    HipcallSMSError,
    InvalidEnvValueError,
    MissingConfigError,
    UnknownAdapterError,
)
from hipcall_sms.results import (
    BalanceResponse,
    DeliveryResponse,
    ErrorKind,
    ErrorRecord,
    Result,
)
from hipcall_sms.sms import SMS, Direction
from hipcall_sms.version import __version__


def version() -> str:
    """Return the library version."""
    return __version__


__all__ = [
    # Facade
    "deliver",
    "get_balance",
    "send",
    "send_sms",
    "resolve_adapter",
    "version",
    "__version__",
    "config",
    # Message
    "SMS",
    "Direction",
    # Results
    "Result",
    "DeliveryResponse",
    "BalanceResponse",
    "ErrorRecord",
    "ErrorKind",
    # Adapters
    "SMSAdapter",
    "BaseAdapter",
    "ADAPTERS",
    "TelnyxAdapter",
    "TwilioAdapter",
    "IletimerkeziAdapter",
    "TestAdapter",
    "Mailbox",
    "capture_sms",
    # Exceptions
    "HipcallSMSError",
    "ConfigurationError",
    "AdapterNotConfiguredError",
    "UnknownAdapterError",
    "MissingConfigError",
    "InvalidEnvValueError",
    "DeliveryFailedError",
]

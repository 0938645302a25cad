"""hipcall_sms adapters - SMSAdapter implementations.

Adapters:
- telnyx: TelnyxAdapter
- twilio: TwilioAdapter
- iletimerkezi: IletimerkeziAdapter
- test: TestAdapter (in-process, for tests)
"""

from hipcall_sms.adapter import BaseAdapter
from hipcall_sms.adapters.iletimerkezi import IletimerkeziAdapter
from hipcall_sms.adapters.telnyx import TelnyxAdapter
from hipcall_sms.adapters.test import Mailbox, TestAdapter, capture_sms
from hipcall_sms.adapters.twilio import TwilioAdapter
from hipcall_sms.exceptions import UnknownAdapterError

ADAPTERS: dict[str, type[BaseAdapter]] = {
    TelnyxAdapter.name: TelnyxAdapter,
    TwilioAdapter.name: TwilioAdapter,
    IletimerkeziAdapter.name: IletimerkeziAdapter,
    TestAdapter.name: TestAdapter,
}


def get_adapter_class(name: str) -> type[BaseAdapter]:
    """Look up a registered adapter by name.

    Raises:
        UnknownAdapterError: If no adapter is registered under name
    """
    try:
        return ADAPTERS[name]
    except KeyError:
        raise UnknownAdapterError(name) from None


__all__ = [
    "ADAPTERS",
    "IletimerkeziAdapter",
    "Mailbox",
    "TelnyxAdapter",
    "TestAdapter",
    "TwilioAdapter",
    "capture_sms",
    "get_adapter_class",
]

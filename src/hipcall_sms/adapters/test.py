"""In-process Test adapter.

Nothing leaves the process. Delivered messages are handed to mailboxes so
tests can assert on them:

    from hipcall_sms import SMS, capture_sms, deliver

    with capture_sms() as mailbox:
        deliver(SMS.new(to="+15555555555", text="hi"), {"adapter": "test"})

    assert mailbox.get_nowait().text == "hi"

Mailboxes opened with ``capture_sms`` are tracked in a ContextVar, so they are
seen by nested calls, asyncio tasks and ``contextvars.copy_context()`` runs
started from the capturing context, and nowhere else.

To collect messages sent from unrelated contexts (worker threads, other tasks),
store a Mailbox, or any object with a ``put`` method such as ``queue.Queue``,
as the process-wide ``shared_test_process`` setting. Every delivery then goes
to that target only.
"""

import logging
import queue
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, ClassVar

from hipcall_sms.adapter import BaseAdapter
from hipcall_sms.config import get_config_value
from hipcall_sms.exceptions import ConfigurationError
from hipcall_sms.results import BalanceResponse, Result
from hipcall_sms.sms import SMS

logger = logging.getLogger(__name__)


class Mailbox:
    """Thread-safe collector of delivered messages.

    ``get``/``get_nowait`` consume messages in delivery order, while
    ``messages`` keeps the full history until ``clear``.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[SMS] = queue.Queue()
        self._history: list[SMS] = []
        self._lock = threading.Lock()

    def put(self, sms: SMS) -> None:
        with self._lock:
            self._history.append(sms)
        self._queue.put(sms)

    def get(self, timeout: float | None = None) -> SMS:
        """Wait for the next message.

        Raises:
            queue.Empty: If nothing arrives within timeout seconds
        """
        return self._queue.get(timeout=timeout)

    def get_nowait(self) -> SMS:
        return self._queue.get_nowait()

    @property
    def messages(self) -> list[SMS]:
        with self._lock:
            return list(self._history)

    def clear(self) -> None:
        with self._lock:
            self._history.clear()
            while True:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    break

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)


_active_mailboxes: ContextVar[tuple[Mailbox, ...]] = ContextVar(
    "hipcall_sms_active_mailboxes", default=()
)


@contextmanager
def capture_sms(mailbox: Mailbox | None = None) -> Iterator[Mailbox]:
    """Collect messages delivered by the Test adapter within this context."""
    mailbox = mailbox if mailbox is not None else Mailbox()
    token = _active_mailboxes.set((*_active_mailboxes.get(), mailbox))
    try:
        yield mailbox
    finally:
        _active_mailboxes.reset(token)


def active_mailboxes() -> list[Mailbox]:
    """Mailboxes visible from the current context, without duplicates."""
    seen: list[Mailbox] = []
    for mailbox in _active_mailboxes.get():
        if not any(mailbox is other for other in seen):
            seen.append(mailbox)
    return seen


class TestAdapter(BaseAdapter):
    """Adapter that records messages instead of sending them."""

    __test__ = False

    name: ClassVar[str] = "test"

    def deliver(self, sms: SMS, config: dict[str, Any]) -> Result:
        shared = get_config_value("shared_test_process")
        if shared is not None:
            if not callable(getattr(shared, "put", None)):
                raise ConfigurationError(
                    f"shared_test_process must have a put() method, got {type(shared).__name__}"
                )
            logger.debug("Test adapter: delivering to shared target")
            shared.put(sms)
            return Result.success({})

        mailboxes = active_mailboxes()
        if not mailboxes:
            logger.debug("Test adapter: no mailbox capturing, message dropped")
        for mailbox in mailboxes:
            mailbox.put(sms)
        return Result.success({})

    def get_balance(self, config: dict[str, Any]) -> Result:
        return Result.success(
            BalanceResponse(
                balance="100.00",
                currency="USD",
                provider=self.name,
                provider_response={"mock": True},
            )
        )

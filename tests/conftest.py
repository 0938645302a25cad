"""Shared pytest fixtures for hipcall_sms tests.

Every test starts from an empty configuration store and an environment free
of HIPCALL_SMS_* variables and .env files.
"""

import os

import pytest

from hipcall_sms import config
from hipcall_sms.adapters.test import Mailbox, capture_sms
from hipcall_sms.drivers.mocks import MockHTTPClient
from hipcall_sms.env import clear_settings_cache


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Reset process-wide settings around each test."""
    for name in list(os.environ):
        if name.startswith("HIPCALL_SMS_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr("hipcall_sms.env.find_dotenv", lambda start_path=None: None)
    config.reset()
    clear_settings_cache()
    yield
    config.reset()
    clear_settings_cache()


@pytest.fixture
def mock_http() -> MockHTTPClient:
    """Install a MockHTTPClient as the process-wide transport.

    Yields:
        MockHTTPClient answering 200 with an empty JSON object by default
    """
    client = MockHTTPClient()
    config.put_env("http_client", client)
    yield client
    config.delete_env("http_client")


@pytest.fixture
def mailbox() -> Mailbox:
    """Capture messages delivered by the Test adapter during the test."""
    with capture_sms() as box:
        yield box

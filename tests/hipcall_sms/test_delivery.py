"""Tests for the delivery facade."""

import pytest

import hipcall_sms
from hipcall_sms import (
    SMS,
    AdapterNotConfiguredError,
    Direction,
    MissingConfigError,
    TelnyxAdapter,
    TestAdapter,
    UnknownAdapterError,
    config,
    deliver,
    get_balance,
    send,
    send_sms,
)
from hipcall_sms.delivery import BASE_CONFIG_KEYS, base_config, resolve_adapter
from hipcall_sms.drivers.mocks import json_response
from hipcall_sms.results import ErrorKind

TELNYX_OK = {"data": {"id": "msg_123", "to": [{"status": "queued"}]}}


class TestResolveAdapter:
    """Tests for resolve_adapter."""

    def test_by_name(self):
        assert isinstance(resolve_adapter("telnyx"), TelnyxAdapter)

    def test_by_class(self):
        assert isinstance(resolve_adapter(TestAdapter), TestAdapter)

    def test_by_instance(self):
        adapter = TestAdapter()
        assert resolve_adapter(adapter) is adapter

    def test_none(self):
        with pytest.raises(AdapterNotConfiguredError) as exc_info:
            resolve_adapter(None)
        assert exc_info.value.message == "No adapter configured. Please set 'adapter' in your config."

    def test_unknown_name(self):
        with pytest.raises(UnknownAdapterError):
            resolve_adapter("carrier_pigeon")

    def test_not_an_adapter(self):
        with pytest.raises(UnknownAdapterError):
            resolve_adapter(42)


class TestBaseConfig:
    """Tests for base_config."""

    def test_reads_mapped_settings(self):
        config.put_env("twilio_account_sid", "AC1")
        config.put_env("twilio_auth_token", "tok")
        assert base_config(resolve_adapter("twilio")) == {"account_sid": "AC1", "auth_token": "tok"}

    def test_unset_settings_left_out(self):
        config.put_env("iletimerkezi_key", "k1")
        assert base_config(resolve_adapter("iletimerkezi")) == {"key": "k1"}

    def test_unset_env_indirection_left_out(self, monkeypatch):
        monkeypatch.delenv("TELNYX_KEY", raising=False)
        config.put_env("telnyx_api_key", config.env("TELNYX_KEY"))
        assert base_config(resolve_adapter("telnyx")) == {}

    def test_unmapped_adapter(self):
        assert "test" not in BASE_CONFIG_KEYS
        assert base_config(TestAdapter()) == {}


class TestDeliver:
    """Tests for deliver."""

    def test_no_adapter(self):
        with pytest.raises(AdapterNotConfiguredError):
            deliver(SMS.new(to="+1", text="hi"))

    def test_rejects_non_sms(self):
        with pytest.raises(TypeError):
            deliver({"to": "+1", "text": "hi"}, {"adapter": "test"})

    def test_process_wide_adapter(self, mailbox):
        config.put_env("adapter", "test")
        sms = SMS.new(to="+1", text="hi")
        assert deliver(sms).ok
        assert mailbox.get_nowait() == sms

    def test_adapter_from_env_settings(self, monkeypatch, mailbox):
        monkeypatch.setenv("HIPCALL_SMS_ADAPTER", "test")
        assert deliver(SMS.new(text="hi")).ok
        assert len(mailbox) == 1

    def test_override_adapter_wins(self, mock_http, mailbox):
        config.put_env("adapter", "telnyx")
        deliver(SMS.new(text="hi"), {"adapter": "test"})
        assert mock_http.calls == []
        assert len(mailbox) == 1

    def test_merges_base_and_overrides(self, mock_http):
        config.put_env("adapter", "telnyx")
        config.put_env("telnyx_api_key", "BASE")
        mock_http.enqueue(json_response(200, TELNYX_OK))

        result = deliver(SMS.new(to="+1", text="hi"), {"api_key": "OVERRIDE"})

        assert result.value.id == "msg_123"
        assert dict(mock_http.last_call["headers"])["Authorization"] == "Bearer OVERRIDE"

    def test_base_config_used(self, mock_http):
        config.put_env("telnyx_api_key", "BASE")
        deliver(SMS.new(to="+1", text="hi"), {"adapter": "telnyx"})
        assert dict(mock_http.last_call["headers"])["Authorization"] == "Bearer BASE"

    def test_adapter_key_not_forwarded(self):
        seen = {}

        class Recording(TestAdapter):
            def deliver(self, sms, config):
                seen.update(config)
                return super().deliver(sms, config)

        deliver(SMS.new(text="hi"), {"adapter": Recording, "extra": 1})
        assert seen == {"extra": 1}

    def test_missing_config_lists_every_key(self, mock_http):
        with pytest.raises(MissingConfigError) as exc_info:
            deliver(SMS.new(to="+1", text="hi"), {"adapter": "twilio"})
        assert exc_info.value.missing == ["account_sid", "auth_token"]
        assert mock_http.calls == []

    def test_overrides_not_mutated(self, mailbox):
        overrides = {"adapter": "test", "x": 1}
        deliver(SMS.new(text="hi"), overrides)
        assert overrides == {"adapter": "test", "x": 1}

    def test_provider_error_returned(self, mock_http):
        mock_http.enqueue(json_response(422, {"errors": []}))
        result = deliver(SMS.new(to="+1", text="hi"), {"adapter": "telnyx", "api_key": "K"})
        assert result.error.kind == ErrorKind.HTTP


class TestGetBalance:
    """Tests for get_balance."""

    def test_test_adapter(self):
        result = get_balance({"adapter": "test"})
        assert result.value.balance == "100.00"

    def test_twilio_not_supported(self):
        config.put_env("twilio_account_sid", "AC1")
        config.put_env("twilio_auth_token", "tok")
        result = get_balance({"adapter": "twilio"})
        assert result.error.kind == ErrorKind.NOT_SUPPORTED

    def test_no_adapter(self):
        with pytest.raises(AdapterNotConfiguredError):
            get_balance()


class TestSend:
    """Tests for send and send_sms."""

    def test_send(self, mailbox):
        result = send("+15551234567", "+15555555555", "Hello!", {"adapter": "test"})
        assert result.ok
        sms = mailbox.get_nowait()
        assert sms.from_ == "+15551234567"
        assert sms.to == "+15555555555"
        assert sms.text == "Hello!"
        assert sms.direction == Direction.OUTBOUND

    def test_send_sms_alias(self):
        assert send_sms is send


class TestPackage:
    """Tests for package-level helpers."""

    def test_version(self):
        assert hipcall_sms.version() == hipcall_sms.__version__ == "0.3.0"

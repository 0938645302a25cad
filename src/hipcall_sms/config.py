"""Process-wide configuration store and value resolver.

Settings can be stored in three forms:

    from hipcall_sms import config

    config.put_env("telnyx_api_key", "KEY0123")                  # literal
    config.put_env("telnyx_api_key", config.env("TELNYX_API_KEY"))  # env indirection
    config.put_env("timeout", config.env_int("SMS_TIMEOUT"))     # integer env indirection

The tuple forms ``("system", "NAME")`` and ``("system", "integer", "NAME")``
are accepted as well.

Values are resolved at read time with ``get_config_value``, so environment
changes are picked up without touching the store. Keys not present in the
store fall back to same-named fields of ``SMSSettings`` (HIPCALL_SMS_* env vars).

The store is meant to be written at startup or in test setup, and only read
during delivery calls.
"""

import os
from dataclasses import dataclass
from typing import Any

from hipcall_sms.env import get_settings
from hipcall_sms.exceptions import InvalidEnvValueError

_store: dict[str, Any] = {}


@dataclass(frozen=True)
class SystemEnv:
    """Indirection to an environment variable, resolved at read time."""

    name: str
    integer: bool = False


def env(name: str) -> SystemEnv:
    """Point a setting at an environment variable."""
    return SystemEnv(name)


def env_int(name: str) -> SystemEnv:
    """Point a setting at an environment variable parsed as an integer."""
    return SystemEnv(name, integer=True)


# Store


def put_env(key: str, value: Any) -> None:
    """Store a process-wide setting."""
    _store[key] = value


def get_env(key: str, default: Any = None) -> Any:
    """Return the raw stored value for key, without resolving indirections."""
    return _store.get(key, default)


def delete_env(key: str) -> None:
    """Remove a process-wide setting. Missing keys are ignored."""
    _store.pop(key, None)


def reset() -> None:
    """Remove every stored setting.

    Call this in test teardown to ensure clean state.
    """
    _store.clear()


# Resolution


def _raw_value(key: str) -> Any:
    if key in _store:
        return _store[key]
    return getattr(get_settings(), key, None)


def _as_system_env(value: Any) -> SystemEnv | None:
    if isinstance(value, SystemEnv):
        return value
    if isinstance(value, tuple):
        if len(value) == 2 and value[0] == "system":
            return SystemEnv(value[1])
        if len(value) == 3 and value[0] == "system" and value[1] == "integer":
            return SystemEnv(value[2], integer=True)
    return None


def resolve(value: Any) -> Any:
    """Resolve a raw stored value.

    Literals are returned verbatim. Environment indirections return the
    variable's value, or None when it is unset.

    Raises:
        InvalidEnvValueError: If an integer indirection is not a base-10 integer
    """
    indirection = _as_system_env(value)
    if indirection is None:
        return value

    raw = os.environ.get(indirection.name)
    if raw is None or not indirection.integer:
        return raw

    try:
        return int(raw, 10)
    except ValueError:
        raise InvalidEnvValueError(indirection.name, raw) from None


def get_config_value(key: str, default: Any = None) -> Any:
    """Resolve a process-wide setting, falling back to default.

    A setting that points at an unset environment variable behaves exactly
    like a setting that was never configured.
    """
    value = resolve(_raw_value(key))
    return default if value is None else value

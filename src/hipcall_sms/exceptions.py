"""hipcall_sms exception hierarchy.

Configuration mistakes are raised immediately, before any network call.
Provider-side failures are never raised: they come back as error records
inside a Result. The only exception tied to delivery is DeliveryFailedError,
raised when a caller explicitly unwraps a failed Result.

Usage:
    from hipcall_sms.exceptions import ConfigurationError, MissingConfigError

    try:
        result = deliver(sms)
    except MissingConfigError as e:
        print(f"Missing keys: {e.missing}")
    except ConfigurationError as e:
        print(f"Bad configuration: {e.message}")
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hipcall_sms.results import ErrorRecord


class HipcallSMSError(Exception):
    """Base exception for all hipcall_sms errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Configuration Errors


class ConfigurationError(HipcallSMSError):
    """Deployment or call configuration is unusable.

    Always raised synchronously, never returned as a value.
    """

    pass


class AdapterNotConfiguredError(ConfigurationError):
    """Neither the call config nor the process settings select an adapter."""

    def __init__(self) -> None:
        super().__init__("No adapter configured. Please set 'adapter' in your config.")


class UnknownAdapterError(ConfigurationError):
    """Adapter name does not match any registered adapter."""

    def __init__(self, adapter: Any) -> None:
        self.adapter = adapter
        super().__init__(f"Unknown adapter: {adapter!r}")


class MissingConfigError(ConfigurationError):
    """One or more required configuration keys are missing or empty.

    The message lists the missing keys and the keys that were supplied;
    values are kept on the exception but never rendered into the message.
    """

    def __init__(
        self,
        missing: list[str],
        config: dict[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        self.missing = list(missing)
        self.config = dict(config or {})
        if message is None:
            supplied = ", ".join(sorted(str(k) for k in self.config)) or "none"
            message = (
                f"Missing required configuration: {', '.join(self.missing)} "
                f"(supplied keys: {supplied})"
            )
        super().__init__(message)


class InvalidEnvValueError(ConfigurationError):
    """An environment value cannot be parsed into the type its setting needs."""

    def __init__(self, env_name: str, value: str, message: str | None = None) -> None:
        self.env_name = env_name
        self.value = value
        super().__init__(
            message
            or f"Environment variable {env_name} must be a base-10 integer, got: {value!r}"
        )


# Delivery Errors


class DeliveryFailedError(HipcallSMSError):
    """Raised by Result.unwrap() when the result carries an error record."""

    def __init__(self, error: "ErrorRecord") -> None:
        self.error = error
        detail = error.error if error.error is not None else error.status
        provider = error.provider or "unknown provider"
        super().__init__(f"SMS request failed ({error.kind.value}, {provider}): {detail}")

"""Environment-seeded settings for hipcall_sms.

Uses pydantic-settings to read ``HIPCALL_SMS_*`` environment variables (and a
.env file found by searching up the directory tree) as the lowest layer of
process-wide configuration. Values stored explicitly with
``hipcall_sms.config.put_env`` always take precedence over these.

    HIPCALL_SMS_ADAPTER=telnyx
    HIPCALL_SMS_TELNYX_API_KEY=KEY0123...
    HIPCALL_SMS_TIMEOUT=30000
"""

from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from hipcall_sms.exceptions import InvalidEnvValueError

ENV_PREFIX = "HIPCALL_SMS_"


class SMSSettings(BaseSettings):
    """Process-wide SMS settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    adapter: str | None = None

    # Telnyx
    telnyx_api_key: str | None = None

    # Twilio
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None

    # Iletimerkezi
    iletimerkezi_key: str | None = None
    iletimerkezi_hash: str | None = None

    # Transport receive timeout in milliseconds
    timeout: int | None = None


def find_dotenv(start_path: Path | None = None) -> Path | None:
    """Return the nearest .env file at or above start_path (default: cwd).

    The walk stops after the home directory when start_path lies inside it,
    otherwise at the filesystem root.
    """
    start = start_path or Path.cwd()
    home = Path.home()

    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
        if directory == home:
            break

    return None


def _load_settings(env_file: Path | None) -> SMSSettings:
    try:
        if env_file:
            return SMSSettings(_env_file=env_file)
        return SMSSettings()
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "settings"
        env_name = f"{ENV_PREFIX}{field.upper()}"
        raise InvalidEnvValueError(
            env_name,
            str(error.get("input")),
            message=f"Environment variable {env_name} is invalid: {error['msg']}",
        ) from None


@lru_cache(maxsize=1)
def get_settings() -> SMSSettings:
    """Get cached SMSSettings instance.

    Raises:
        InvalidEnvValueError: If a HIPCALL_SMS_* value does not match its field type
    """
    return _load_settings(find_dotenv())


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()

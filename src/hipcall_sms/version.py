"""Library version."""

__version__ = "0.3.0"

USER_AGENT = f"hipcall_sms/{__version__}"

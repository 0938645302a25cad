"""hipcall_sms protocols - Interface definitions.

Protocols define the contracts the core depends on. Implementations live in
hipcall_sms.drivers.

Protocols:
- HTTPClient: HTTP request execution (transport port)

Import protocols directly from their modules:
    from hipcall_sms.protocols.http import HTTPClient
"""

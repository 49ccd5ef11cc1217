"""
Notifications component - templated relay of form submissions by email.
"""

from .component import NotificationRelay
from .models import (
    RELAY_KINDS,
    ApplicationPayload,
    ContactPayload,
    RelayConfig,
    RelayKind,
    RenderedEmail,
)

__all__ = [
    "RELAY_KINDS",
    "ApplicationPayload",
    "ContactPayload",
    "NotificationRelay",
    "RelayConfig",
    "RelayKind",
    "RenderedEmail",
]

"""Utilities for the push demo."""

from .payload_builder import (
    DEMO_NOTIFICATION,
    DEMO_PAYLOAD,
    IdentityType,
    NotificationType,
    SendMode,
    build_direct_payload,
    build_identity,
    build_notification_options,
    build_payload_typed_data,
    build_subscription_typed_data,
    resolve_recipients,
)

__all__ = [
    "DEMO_NOTIFICATION",
    "DEMO_PAYLOAD",
    "IdentityType",
    "NotificationType",
    "SendMode",
    "build_direct_payload",
    "build_identity",
    "build_notification_options",
    "build_payload_typed_data",
    "build_subscription_typed_data",
    "resolve_recipients",
]

"""Public helpers for emitting order and account notifications."""

from .messages import notification_message, notification_title
from .registry import (
    CHANNEL_EMAIL,
    CHANNEL_IN_APP,
    CHANNEL_SMS,
    NotificationRegistry,
    RecipientNotFoundError,
)

__all__ = [
    "CHANNEL_EMAIL",
    "CHANNEL_IN_APP",
    "CHANNEL_SMS",
    "NotificationRegistry",
    "RecipientNotFoundError",
    "notification_message",
    "notification_title",
]

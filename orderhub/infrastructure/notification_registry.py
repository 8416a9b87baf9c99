"""Wiring of the notification registry with the production collaborators."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

from sqlalchemy.orm import Session

from orderhub.application.use_cases.notifications import NotificationRegistry
from orderhub.config import Settings, get_settings

from .adapters import SqlNotificationStore, SqlUserDirectory
from .email import SendGridEmailSender
from .sms import TwilioSmsSender


def build_notification_registry(
    session_factory: Callable[[], Session],
    settings: Settings | None = None,
) -> NotificationRegistry:
    """Return a registry backed by the database, SendGrid and Twilio."""

    settings = settings or get_settings()
    return NotificationRegistry(
        users=SqlUserDirectory(session_factory),
        email_sender=SendGridEmailSender(settings),
        sms_sender=TwilioSmsSender(settings),
        store=SqlNotificationStore(session_factory),
    )


@lru_cache
def get_notification_registry() -> NotificationRegistry:
    """Return the shared registry bound to the application session factory."""

    from orderhub.infrastructure.database import SessionLocal

    return build_notification_registry(SessionLocal)


__all__ = ["build_notification_registry", "get_notification_registry"]

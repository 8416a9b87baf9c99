"""Protocols describing the collaborators of the notification registry.

Any object with matching coroutine methods satisfies these contracts; the SQL
backed adapters, the SendGrid and Twilio senders and the in-memory fakes used by
the test-suite all plug in without inheriting from them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from orderhub.domain.entities import EmailData, Notification, SmsData, SmsResult, User


@runtime_checkable
class UserDirectory(Protocol):
    """Lookup of customer and staff records."""

    async def get_user(self, user_id: str) -> User | None:
        """Return the user identified by ``user_id`` or ``None``."""
        ...

    async def get_all_staff_and_admin_users(self) -> Sequence[User]:
        """Return every employee and administrator."""
        ...


@runtime_checkable
class EmailSender(Protocol):
    async def send_email(self, data: EmailData, template_type: str) -> bool:
        """Render the ``template_type`` email in ``data.language`` and send it."""
        ...


@runtime_checkable
class SmsSender(Protocol):
    async def send_sms(self, data: SmsData, message_type: str) -> SmsResult:
        """Check consent, render the ``message_type`` text and send it."""
        ...


@runtime_checkable
class NotificationStore(Protocol):
    async def create_notification(self, notification: Notification) -> Notification | None:
        """Persist ``notification`` and return the stored record."""
        ...


__all__ = ["UserDirectory", "EmailSender", "SmsSender", "NotificationStore"]

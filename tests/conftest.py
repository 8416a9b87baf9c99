"""Shared fixtures and in-memory collaborators for the test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "orderhub-test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
for name in (
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_FROM_NUMBER",
):
    os.environ.pop(name, None)

from orderhub.domain.entities import Notification, SmsResult, User  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeUserDirectory:
    def __init__(self, users: list[User] | None = None, *, error: Exception | None = None):
        self.users = {user.id: user for user in users or []}
        self.error = error

    async def get_user(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    async def get_all_staff_and_admin_users(self) -> list[User]:
        if self.error is not None:
            raise self.error
        return [user for user in self.users.values() if user.is_staff()]


class FakeEmailSender:
    """Records every call; ``outcomes`` maps an address to a bool or an exception."""

    def __init__(self, default: bool = True, outcomes: dict | None = None):
        self.default = default
        self.outcomes = outcomes or {}
        self.calls: list[tuple] = []

    async def send_email(self, data, template_type: str) -> bool:
        self.calls.append((data, template_type))
        outcome = self.outcomes.get(data.to, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeSmsSender:
    def __init__(self, default: SmsResult | Exception | None = None, outcomes: dict | None = None):
        self.default = default or SmsResult(success=True, message_id="SM123")
        self.outcomes = outcomes or {}
        self.calls: list[tuple] = []

    async def send_sms(self, data, message_type: str) -> SmsResult:
        self.calls.append((data, message_type))
        outcome = self.outcomes.get(data.to, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeNotificationStore:
    def __init__(self, default: bool | Exception = True, outcomes: dict | None = None):
        self.default = default
        self.outcomes = outcomes or {}
        self.records: list[Notification] = []
        self.calls = 0

    async def create_notification(self, notification: Notification) -> Notification | None:
        self.calls += 1
        outcome = self.outcomes.get(notification.user_id, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        if not outcome:
            return None
        self.records.append(notification)
        return notification

"""Async adapters exposing the SQL repositories through the registry ports.

The repositories work on blocking SQLAlchemy sessions. Each call opens its own
session inside a worker thread, so concurrent recipients of a fan-out never
share a session.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from anyio import to_thread
from sqlalchemy.orm import Session

from orderhub.domain.entities import Notification, User
from orderhub.infrastructure.repositories import NotificationRepository, UserRepository

T = TypeVar("T")


async def _run_in_session(session_factory: Callable[[], Session], work: Callable[[Session], T]) -> T:
    def run() -> T:
        session = session_factory()
        try:
            return work(session)
        finally:
            session.close()

    return await to_thread.run_sync(run)


class SqlUserDirectory:
    """:class:`~orderhub.domain.ports.UserDirectory` backed by the users table."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    async def get_user(self, user_id: str) -> User | None:
        return await _run_in_session(
            self._session_factory, lambda session: UserRepository(session).get(user_id)
        )

    async def get_all_staff_and_admin_users(self) -> Sequence[User]:
        return await _run_in_session(
            self._session_factory,
            lambda session: UserRepository(session).list_staff_and_admins(),
        )


class SqlNotificationStore:
    """:class:`~orderhub.domain.ports.NotificationStore` backed by the notifications table."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    async def create_notification(self, notification: Notification) -> Notification | None:
        return await _run_in_session(
            self._session_factory,
            lambda session: NotificationRepository(session).create(notification),
        )


__all__ = ["SqlNotificationStore", "SqlUserDirectory"]

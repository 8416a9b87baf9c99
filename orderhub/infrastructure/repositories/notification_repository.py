"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from orderhub.domain.entities import Notification
from orderhub.infrastructure.models import NotificationModel
from orderhub.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide create, list and read-state operations for notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = 50,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .scalar()
            or 0
        )

    def create(self, notification: Notification) -> Notification:
        now = ensure_app_naive_datetime(now_in_app_timezone())
        model = NotificationModel(
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            order_id=notification.order_id,
            data=notification.data or {},
            is_read=notification.is_read,
            created_at=ensure_app_naive_datetime(notification.created_at) or now,
            updated_at=ensure_app_naive_datetime(notification.updated_at) or now,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: str) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(self._read_values(), synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: str) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(self._read_values(), synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _read_values() -> dict:
        return {
            NotificationModel.is_read: True,
            NotificationModel.updated_at: ensure_app_naive_datetime(now_in_app_timezone()),
        }

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            order_id=model.order_id,
            data=model.data or {},
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]

"""Endpoints for reading and acknowledging in-app notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from orderhub.domain.entities import Notification, User
from orderhub.infrastructure.database import get_db
from orderhub.infrastructure.repositories import NotificationRepository
from orderhub.interfaces.api.dependencies import get_current_user
from orderhub.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        order_id=notification.order_id,
        data=notification.data or {},
        is_read=notification.is_read,
        created_at=notification.created_at,
        updated_at=notification.updated_at,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int = Query(50, ge=1, le=200),
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = NotificationRepository(db).list_for_user(
        current_user.id, limit=limit, unread_only=unread_only
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=NotificationRepository(db).count_unread(current_user.id))


@router.post("/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    """Mark the given notifications of the authenticated user as read."""

    NotificationRepository(db).mark_as_read(payload.unique_ids(), user_id=current_user.id)


@router.post("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> None:
    NotificationRepository(db).mark_all_as_read(current_user.id)

"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the identifiers without duplicates, preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationRead(BaseModel):
    """Representation of an in-app notification delivered to the client."""

    id: int
    user_id: str
    type: str
    title: str
    message: str
    order_id: int | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime
    updated_at: datetime


class UnreadCountRead(BaseModel):
    count: int


__all__ = ["NotificationMarkReadRequest", "NotificationRead", "UnreadCountRead"]

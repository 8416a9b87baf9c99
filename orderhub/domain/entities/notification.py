"""Domain entity representing an in-app notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Information message stored for a specific user."""

    id: int | None
    user_id: str
    type: str
    title: str
    message: str
    order_id: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Notification"]

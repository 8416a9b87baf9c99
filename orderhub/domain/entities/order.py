"""Domain entities describing a placed order."""

from dataclasses import dataclass, field
from datetime import datetime

ORDER_STATUS_PENDING = "pending"
ORDER_STATUS_PROCESSING = "processing"
ORDER_STATUS_READY = "ready"
ORDER_STATUS_DELIVERED = "delivered"
ORDER_STATUS_COMPLETED = "completed"
ORDER_STATUS_CANCELLED = "cancelled"


@dataclass
class OrderItem:
    """Single line of an order."""

    product_name: str
    quantity: int
    price: float
    product_id: int | None = None

    @property
    def line_total(self) -> float:
        return self.quantity * self.price


@dataclass
class Order:
    """Order placed by a customer through the storefront or the POS."""

    id: int
    user_id: str
    total: float
    status: str = ORDER_STATUS_PENDING
    order_type: str = "delivery"
    items: list[OrderItem] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def number(self) -> str:
        return str(self.id)


__all__ = [
    "Order",
    "OrderItem",
    "ORDER_STATUS_PENDING",
    "ORDER_STATUS_PROCESSING",
    "ORDER_STATUS_READY",
    "ORDER_STATUS_DELIVERED",
    "ORDER_STATUS_COMPLETED",
    "ORDER_STATUS_CANCELLED",
]

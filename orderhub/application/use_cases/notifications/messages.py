"""Title and message text for in-app notification records."""

from __future__ import annotations

from orderhub.domain.entities import (
    AccountApprovedPayload,
    GeneralPayload,
    NotificationPayload,
    OrderConfirmationPayload,
    OrderNotePayload,
    OrderStatusUpdatePayload,
    StaffOrderAlertPayload,
)


def _money(amount: float) -> str:
    return f"${amount:.2f}"


def notification_title(payload: NotificationPayload) -> str:
    """Return the short headline shown in the notification list."""

    if isinstance(payload, OrderConfirmationPayload):
        return f"Order #{payload.order_number} Confirmed"
    if isinstance(payload, StaffOrderAlertPayload):
        return f"New Order #{payload.order_number}"
    if isinstance(payload, OrderStatusUpdatePayload):
        return f"Order #{payload.order_number} {payload.order_status}"
    if isinstance(payload, OrderNotePayload):
        return f"New Note Added to Order #{payload.order_number}"
    if isinstance(payload, AccountApprovedPayload):
        return "Account Approved"
    return "Notification"


def notification_message(payload: NotificationPayload) -> str:
    """Return the body text of the in-app notification."""

    if isinstance(payload, OrderConfirmationPayload):
        return (
            f"Your order for {_money(payload.order_total)} has been confirmed "
            "and is being processed."
        )
    if isinstance(payload, StaffOrderAlertPayload):
        return (
            f"{payload.customer_name} placed a new order for "
            f"{_money(payload.order_total)}. Review and process the order."
        )
    if isinstance(payload, OrderStatusUpdatePayload):
        return f"Your order status has been updated to: {payload.order_status}"
    if isinstance(payload, OrderNotePayload):
        return f'{payload.author or "Staff"} added a note to your order: "{payload.note}"'
    if isinstance(payload, AccountApprovedPayload):
        return "Your wholesale account has been approved."
    if isinstance(payload, GeneralPayload) and payload.message:
        return payload.message
    return "You have a new notification"


__all__ = ["notification_title", "notification_message"]

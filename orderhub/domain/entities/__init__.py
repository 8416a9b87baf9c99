"""Domain entities exposed by the application."""

from .notification import Notification
from .notification_event import (
    EVENT_ACCOUNT_APPROVED,
    EVENT_GENERAL,
    EVENT_ORDER_CONFIRMATION,
    EVENT_ORDER_NOTE,
    EVENT_ORDER_STATUS_UPDATE,
    EVENT_STAFF_NEW_ORDER_ALERT,
    EVENT_TYPES,
    AccountApprovedPayload,
    ChannelOptions,
    DispatchResult,
    EmailData,
    GeneralPayload,
    NotificationEvent,
    NotificationOutcome,
    NotificationPayload,
    OrderConfirmationPayload,
    OrderNotePayload,
    OrderStatusUpdatePayload,
    SmsConsent,
    SmsData,
    SmsResult,
    StaffOrderAlertPayload,
)
from .order import (
    ORDER_STATUS_CANCELLED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_DELIVERED,
    ORDER_STATUS_PENDING,
    ORDER_STATUS_PROCESSING,
    ORDER_STATUS_READY,
    Order,
    OrderItem,
)
from .user import DEFAULT_LANGUAGE, User

__all__ = [
    "DEFAULT_LANGUAGE",
    "User",
    "Order",
    "OrderItem",
    "ORDER_STATUS_PENDING",
    "ORDER_STATUS_PROCESSING",
    "ORDER_STATUS_READY",
    "ORDER_STATUS_DELIVERED",
    "ORDER_STATUS_COMPLETED",
    "ORDER_STATUS_CANCELLED",
    "Notification",
    "EVENT_ORDER_CONFIRMATION",
    "EVENT_STAFF_NEW_ORDER_ALERT",
    "EVENT_ORDER_STATUS_UPDATE",
    "EVENT_ORDER_NOTE",
    "EVENT_ACCOUNT_APPROVED",
    "EVENT_GENERAL",
    "EVENT_TYPES",
    "OrderConfirmationPayload",
    "StaffOrderAlertPayload",
    "OrderStatusUpdatePayload",
    "OrderNotePayload",
    "AccountApprovedPayload",
    "GeneralPayload",
    "NotificationPayload",
    "NotificationEvent",
    "ChannelOptions",
    "NotificationOutcome",
    "DispatchResult",
    "EmailData",
    "SmsConsent",
    "SmsData",
    "SmsResult",
]

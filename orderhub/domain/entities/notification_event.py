"""Transient value objects used while routing a notification.

A :class:`NotificationEvent` is built for every business action (an order is
placed, its status changes, a note is added, an account is approved), handed
to the notification registry and discarded once the channel senders have been
called. Each event type has its own payload class so that the fields the type
needs are always present; optional fields fall back to neutral text when the
messages are rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from .order import OrderItem

EVENT_ORDER_CONFIRMATION = "order_confirmation"
EVENT_STAFF_NEW_ORDER_ALERT = "staff_new_order_alert"
EVENT_ORDER_STATUS_UPDATE = "order_status_update"
EVENT_ORDER_NOTE = "order_note"
EVENT_ACCOUNT_APPROVED = "account_approved"
EVENT_GENERAL = "general"

EVENT_TYPES = (
    EVENT_ORDER_CONFIRMATION,
    EVENT_STAFF_NEW_ORDER_ALERT,
    EVENT_ORDER_STATUS_UPDATE,
    EVENT_ORDER_NOTE,
    EVENT_ACCOUNT_APPROVED,
    EVENT_GENERAL,
)


@dataclass(frozen=True)
class OrderConfirmationPayload:
    event_type: ClassVar[str] = EVENT_ORDER_CONFIRMATION

    order_number: str
    order_total: float
    customer_name: str | None = None
    order_items: tuple[OrderItem, ...] = ()
    delivery_address: str | None = None
    order_id: int | None = None


@dataclass(frozen=True)
class StaffOrderAlertPayload:
    event_type: ClassVar[str] = EVENT_STAFF_NEW_ORDER_ALERT

    order_number: str
    order_total: float
    customer_name: str
    order_items: tuple[OrderItem, ...] = ()
    delivery_address: str | None = None
    order_id: int | None = None


@dataclass(frozen=True)
class OrderStatusUpdatePayload:
    event_type: ClassVar[str] = EVENT_ORDER_STATUS_UPDATE

    order_number: str
    order_status: str
    old_status: str | None = None
    order_total: float | None = None
    customer_name: str | None = None
    order_id: int | None = None


@dataclass(frozen=True)
class OrderNotePayload:
    event_type: ClassVar[str] = EVENT_ORDER_NOTE

    order_number: str
    note: str
    author: str | None = None
    customer_name: str | None = None
    order_id: int | None = None


@dataclass(frozen=True)
class AccountApprovedPayload:
    event_type: ClassVar[str] = EVENT_ACCOUNT_APPROVED

    username: str
    password: str
    customer_level: int
    credit_limit: float
    customer_name: str | None = None
    business_name: str | None = None
    order_id: ClassVar[None] = None


@dataclass(frozen=True)
class GeneralPayload:
    event_type: ClassVar[str] = EVENT_GENERAL

    message: str | None = None
    customer_name: str | None = None
    order_id: int | None = None


NotificationPayload = Union[
    OrderConfirmationPayload,
    StaffOrderAlertPayload,
    OrderStatusUpdatePayload,
    OrderNotePayload,
    AccountApprovedPayload,
    GeneralPayload,
]


@dataclass(frozen=True)
class NotificationEvent:
    """A business event addressed to a single recipient."""

    recipient_id: str
    payload: NotificationPayload
    language: str = "en"

    @property
    def event_type(self) -> str:
        return self.payload.event_type

    @property
    def order_id(self) -> int | None:
        return self.payload.order_id

    def extra_data(self) -> dict[str, Any]:
        """Return the extra data stored alongside the in-app record."""

        payload = self.payload
        if isinstance(payload, OrderStatusUpdatePayload):
            return {"oldStatus": payload.old_status, "newStatus": payload.order_status}
        if isinstance(payload, OrderNotePayload):
            return {"note": payload.note, "fromUser": payload.author}
        return {}


@dataclass(frozen=True)
class ChannelOptions:
    """Which channels the caller wants to attempt for a recipient."""

    include_in_app: bool = True
    include_sms: bool = False
    include_email: bool = False

    @classmethod
    def piggyback(cls, email_enabled: bool) -> "ChannelOptions":
        """In-app always; SMS follows the email opt-in instead of its own flag."""

        return cls(include_in_app=True, include_sms=email_enabled, include_email=email_enabled)

    @classmethod
    def strict(cls, *, sms_enabled: bool, email_enabled: bool) -> "ChannelOptions":
        """In-app always; SMS and email each follow their own opt-in."""

        return cls(include_in_app=True, include_sms=sms_enabled, include_email=email_enabled)

    @classmethod
    def email_only(cls) -> "ChannelOptions":
        return cls(include_in_app=False, include_sms=False, include_email=True)


@dataclass
class NotificationOutcome:
    """Per-channel results of a single recipient dispatch."""

    in_app: bool = False
    sms: bool = False
    email: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.in_app or self.sms or self.email

    def as_details(self) -> dict[str, Any]:
        return {
            "inApp": self.in_app,
            "sms": self.sms,
            "email": self.email,
            "errors": list(self.errors),
        }


@dataclass
class DispatchResult:
    """Structured result returned by every registry entry point."""

    success: bool
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_outcome(cls, outcome: NotificationOutcome) -> "DispatchResult":
        return cls(success=outcome.success, details=outcome.as_details())

    @classmethod
    def failure(cls, message: str) -> "DispatchResult":
        return cls(success=False, details={"error": message})


@dataclass(frozen=True)
class EmailData:
    """Everything an email sender needs to render and deliver a message."""

    to: str
    recipient_name: str
    language: str
    payload: NotificationPayload


@dataclass(frozen=True)
class SmsConsent:
    """Consent flags captured for the destination phone's owner."""

    given: bool = False
    transactional: bool = False
    marketing: bool = False
    opted_out: bool = False


@dataclass(frozen=True)
class SmsData:
    """Everything an SMS sender needs to check consent and deliver a text."""

    to: str
    recipient_name: str
    language: str
    payload: NotificationPayload
    consent: SmsConsent = field(default_factory=SmsConsent)


@dataclass(frozen=True)
class SmsResult:
    success: bool
    message_id: str | None = None
    error: str | None = None


__all__ = [
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

"""Notification registry: one entry point per business event.

Every ``send_*`` coroutine resolves its recipients, shapes the event payload for
each of them, decides which channels to attempt and hands the result to
:meth:`NotificationRegistry.process_notification`. Channels are attempted and
failed independently: a failing email provider never prevents the SMS or the
in-app record, and partial success is reported as success.

None of the entry points raise. Failures to resolve a recipient are returned as
``DispatchResult(success=False, details={"error": ...})`` so that callers (order
placement, admin actions) never block on notifications.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from datetime import datetime

from orderhub.domain.entities import (
    AccountApprovedPayload,
    ChannelOptions,
    DispatchResult,
    EmailData,
    Notification,
    NotificationEvent,
    NotificationOutcome,
    Order,
    OrderConfirmationPayload,
    OrderItem,
    OrderNotePayload,
    OrderStatusUpdatePayload,
    SmsConsent,
    SmsData,
    StaffOrderAlertPayload,
    User,
)
from orderhub.domain.ports import EmailSender, NotificationStore, SmsSender, UserDirectory
from orderhub.utils import now_in_app_timezone

from .messages import notification_message, notification_title

logger = logging.getLogger(__name__)

CHANNEL_IN_APP = "In-app"
CHANNEL_SMS = "SMS"
CHANNEL_EMAIL = "Email"

ChannelAttempt = Callable[[], Awaitable[tuple[bool, str]]]


class RecipientNotFoundError(LookupError):
    """Raised when the user a notification is addressed to does not exist."""


class NotificationRegistry:
    """Route business events to in-app, SMS and email channels."""

    def __init__(
        self,
        users: UserDirectory,
        email_sender: EmailSender,
        sms_sender: SmsSender,
        store: NotificationStore,
        *,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._users = users
        self._email_sender = email_sender
        self._sms_sender = sms_sender
        self._store = store
        self._clock = clock

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    async def send_customer_order_confirmation(
        self,
        customer_id: str,
        order: Order,
        order_items: Sequence[OrderItem],
        delivery_address: str | None = None,
    ) -> DispatchResult:
        """Confirm a placed order to the customer who placed it."""

        logger.info("Sending order confirmation for order #%s", order.id)
        try:
            customer = await self._require_user(customer_id)
            event = NotificationEvent(
                recipient_id=customer.id,
                language=customer.language,
                payload=OrderConfirmationPayload(
                    order_number=order.number,
                    order_total=order.total,
                    customer_name=customer.display_name,
                    order_items=tuple(order_items),
                    delivery_address=delivery_address,
                    order_id=order.id,
                ),
            )
            # SMS follows the email opt-in here, not ``sms_notifications``.
            options = ChannelOptions.piggyback(customer.email_notifications)
            outcome = await self.process_notification(customer, event, options)
        except Exception as exc:
            logger.exception("Error sending order confirmation for order #%s", order.id)
            return DispatchResult.failure(str(exc))
        return DispatchResult.from_outcome(outcome)

    async def send_staff_order_alert(
        self,
        order: Order,
        order_items: Sequence[OrderItem],
        customer: User,
        delivery_address: str | None = None,
    ) -> DispatchResult:
        """Alert every employee and administrator about a new order."""

        logger.info("Sending staff alerts for order #%s", order.id)
        items = tuple(order_items)

        def build(staff: User) -> tuple[NotificationEvent, ChannelOptions]:
            event = NotificationEvent(
                recipient_id=staff.id,
                language=staff.language,
                payload=StaffOrderAlertPayload(
                    order_number=order.number,
                    order_total=order.total,
                    customer_name=customer.display_name,
                    order_items=items,
                    delivery_address=delivery_address,
                    order_id=order.id,
                ),
            )
            return event, ChannelOptions.piggyback(staff.email_notifications)

        try:
            staff_users = await self._users.get_all_staff_and_admin_users()
            outcomes = await self._fan_out(staff_users, build)
        except Exception as exc:
            logger.exception("Error sending staff alerts for order #%s", order.id)
            return DispatchResult.failure(str(exc))

        result = self._aggregate(outcomes)
        logger.info(
            "Staff alerts for order #%s: %s/%s successful",
            order.id,
            result.details["successful"],
            result.details["total"],
        )
        return result

    async def send_order_status_update(
        self,
        customer_id: str,
        order: Order,
        new_status: str,
        old_status: str | None = None,
    ) -> DispatchResult:
        """Tell the customer that the status of their order changed."""

        logger.info(
            "Sending status update for order #%s: %s -> %s", order.id, old_status, new_status
        )
        try:
            customer = await self._require_user(customer_id)
            event = NotificationEvent(
                recipient_id=customer.id,
                language=customer.language,
                payload=OrderStatusUpdatePayload(
                    order_number=order.number,
                    order_status=new_status,
                    old_status=old_status,
                    order_total=order.total,
                    customer_name=customer.display_name,
                    order_id=order.id,
                ),
            )
            options = ChannelOptions.strict(
                sms_enabled=customer.sms_notifications,
                email_enabled=customer.email_notifications,
            )
            outcome = await self.process_notification(customer, event, options)
        except Exception as exc:
            logger.exception("Error sending status update for order #%s", order.id)
            return DispatchResult.failure(str(exc))
        return DispatchResult.from_outcome(outcome)

    async def send_order_note_notification(
        self,
        order: Order,
        note: str,
        from_user: User,
        notify_customer: bool = False,
    ) -> DispatchResult:
        """Share a note added to ``order`` with its customer or with the staff."""

        logger.info(
            "Sending note notification for order #%s to %s",
            order.id,
            "customer" if notify_customer else "staff",
        )

        def build(recipient: User) -> tuple[NotificationEvent, ChannelOptions]:
            event = NotificationEvent(
                recipient_id=recipient.id,
                language=recipient.language,
                payload=OrderNotePayload(
                    order_number=order.number,
                    note=note,
                    author=from_user.display_name,
                    customer_name=(
                        recipient.display_name if notify_customer else from_user.display_name
                    ),
                    order_id=order.id,
                ),
            )
            options = ChannelOptions.strict(
                sms_enabled=recipient.sms_notifications,
                email_enabled=recipient.email_notifications,
            )
            return event, options

        try:
            if notify_customer:
                recipients: Sequence[User] = [await self._require_user(order.user_id)]
            else:
                recipients = await self._users.get_all_staff_and_admin_users()
            outcomes = await self._fan_out(recipients, build)
        except Exception as exc:
            logger.exception("Error sending note notification for order #%s", order.id)
            return DispatchResult.failure(str(exc))

        result = self._aggregate(outcomes)
        result.details["audience"] = "customer" if notify_customer else "staff"
        return result

    async def send_account_approval_notification(
        self,
        customer: User,
        username: str,
        password: str,
        customer_level: int,
        credit_limit: float,
    ) -> DispatchResult:
        """Email the login credentials of a newly approved account.

        Credentials travel by email only; the in-app and SMS channels are
        disabled whatever the customer's stored preferences are.
        """

        logger.info("Sending account approval notification to user %s", customer.id)
        try:
            event = NotificationEvent(
                recipient_id=customer.id,
                language=customer.language,
                payload=AccountApprovedPayload(
                    username=username,
                    password=password,
                    customer_level=customer_level,
                    credit_limit=credit_limit,
                    customer_name=customer.display_name,
                    business_name=customer.business_name,
                ),
            )
            outcome = await self.process_notification(
                customer, event, ChannelOptions.email_only()
            )
        except Exception as exc:
            logger.exception("Error sending account approval to user %s", customer.id)
            return DispatchResult.failure(str(exc))
        return DispatchResult.from_outcome(outcome)

    # ------------------------------------------------------------------
    # Core processor
    # ------------------------------------------------------------------
    async def process_notification(
        self, user: User, event: NotificationEvent, options: ChannelOptions
    ) -> NotificationOutcome:
        """Attempt every requested channel for ``user`` and collect the results."""

        logger.debug(
            "Processing %s for user %s (in_app=%s, sms=%s, email=%s)",
            event.event_type,
            user.id,
            options.include_in_app,
            options.include_sms,
            options.include_email,
        )
        outcome = NotificationOutcome()

        if options.include_in_app:
            outcome.in_app = await self._run_channel(
                CHANNEL_IN_APP, lambda: self._create_in_app(user, event), outcome
            )

        if options.include_sms:
            if user.phone:
                outcome.sms = await self._run_channel(
                    CHANNEL_SMS, lambda: self._send_sms(user, event), outcome
                )
            else:
                logger.debug("Skipping SMS for user %s: no phone number", user.id)

        if options.include_email:
            if user.contact_email:
                outcome.email = await self._run_channel(
                    CHANNEL_EMAIL, lambda: self._send_email(user, event), outcome
                )
            else:
                logger.debug("Skipping email for user %s: no email address", user.id)

        logger.info(
            "Notification %s for user %s: in_app=%s sms=%s email=%s",
            event.event_type,
            user.id,
            outcome.in_app,
            outcome.sms,
            outcome.email,
        )
        return outcome

    async def _run_channel(
        self, channel: str, attempt: ChannelAttempt, outcome: NotificationOutcome
    ) -> bool:
        ok, error = await self._try_channel(channel, attempt)
        if error is not None:
            outcome.errors.append(error)
        return ok

    @staticmethod
    async def _try_channel(channel: str, attempt: ChannelAttempt) -> tuple[bool, str | None]:
        """Run ``attempt`` and turn any failure into a ``"<channel>: ..."`` message."""

        try:
            ok, reason = await attempt()
        except Exception as exc:
            logger.exception("%s notification failed", channel)
            return False, f"{channel}: {exc}"
        if ok:
            return True, None
        logger.warning("%s notification failed: %s", channel, reason)
        return False, f"{channel}: {reason}"

    async def _create_in_app(self, user: User, event: NotificationEvent) -> tuple[bool, str]:
        now = self._clock()
        record = Notification(
            id=None,
            user_id=user.id,
            type=event.event_type,
            title=notification_title(event.payload),
            message=notification_message(event.payload),
            order_id=event.order_id,
            data=event.extra_data(),
            is_read=False,
            created_at=now,
            updated_at=now,
        )
        stored = await self._store.create_notification(record)
        return stored is not None, "notification was not stored"

    async def _send_sms(self, user: User, event: NotificationEvent) -> tuple[bool, str]:
        data = SmsData(
            to=user.phone or "",
            recipient_name=user.display_name,
            language=event.language,
            payload=event.payload,
            consent=SmsConsent(
                given=user.sms_consent_given,
                transactional=user.transactional_sms_consent,
                marketing=user.marketing_sms_consent,
                opted_out=user.sms_opt_out_at is not None,
            ),
        )
        result = await self._sms_sender.send_sms(data, event.event_type)
        return result.success, result.error or "delivery failed"

    async def _send_email(self, user: User, event: NotificationEvent) -> tuple[bool, str]:
        data = EmailData(
            to=user.contact_email or "",
            recipient_name=user.display_name,
            language=event.language,
            payload=event.payload,
        )
        sent = await self._email_sender.send_email(data, event.event_type)
        return bool(sent), "delivery failed"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _require_user(self, user_id: str) -> User:
        user = await self._users.get_user(user_id)
        if user is None:
            raise RecipientNotFoundError(f"Customer not found: {user_id}")
        return user

    async def _fan_out(
        self,
        recipients: Iterable[User],
        build: Callable[[User], tuple[NotificationEvent, ChannelOptions]],
    ) -> list[NotificationOutcome]:
        async def dispatch(recipient: User) -> NotificationOutcome:
            event, options = build(recipient)
            return await self.process_notification(recipient, event, options)

        return list(await asyncio.gather(*(dispatch(user) for user in recipients)))

    @staticmethod
    def _aggregate(outcomes: Sequence[NotificationOutcome]) -> DispatchResult:
        successful = sum(1 for outcome in outcomes if outcome.success)
        return DispatchResult(
            success=successful > 0,
            details={
                "total": len(outcomes),
                "successful": successful,
                "results": [outcome.as_details() for outcome in outcomes],
            },
        )


__all__ = [
    "CHANNEL_EMAIL",
    "CHANNEL_IN_APP",
    "CHANNEL_SMS",
    "NotificationRegistry",
    "RecipientNotFoundError",
]

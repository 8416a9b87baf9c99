"""Behavioural tests for the notification registry channel routing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import (
    FakeEmailSender,
    FakeNotificationStore,
    FakeSmsSender,
    FakeUserDirectory,
)
from orderhub.application.use_cases.notifications import NotificationRegistry
from orderhub.domain.entities import (
    EVENT_ACCOUNT_APPROVED,
    EVENT_ORDER_CONFIRMATION,
    EVENT_ORDER_NOTE,
    EVENT_ORDER_STATUS_UPDATE,
    ChannelOptions,
    NotificationEvent,
    Order,
    OrderItem,
    OrderNotePayload,
    SmsResult,
    User,
)

pytestmark = pytest.mark.anyio

FIXED_NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def _customer(**overrides) -> User:
    values = dict(
        id="cust-1",
        username="corner-store",
        first_name="Ana",
        last_name="Lopez",
        email="a@b.com",
        phone="+15551234567",
        preferred_language="es",
        email_notifications=True,
        sms_notifications=False,
    )
    values.update(overrides)
    return User(**values)


def _staff(user_id: str, **overrides) -> User:
    values = dict(
        id=user_id,
        username=user_id,
        email=f"{user_id}@example.com",
        phone=None,
        is_employee=True,
        email_notifications=True,
    )
    values.update(overrides)
    return User(**values)


def _order() -> Order:
    return Order(id=42, user_id="cust-1", total=125.5)


ITEMS = [OrderItem(product_name="Rice 20lb", quantity=2, price=30.0)]


def _registry(
    users: list[User],
    *,
    email: FakeEmailSender | None = None,
    sms: FakeSmsSender | None = None,
    store: FakeNotificationStore | None = None,
    directory: FakeUserDirectory | None = None,
) -> NotificationRegistry:
    return NotificationRegistry(
        users=directory or FakeUserDirectory(users),
        email_sender=email or FakeEmailSender(),
        sms_sender=sms or FakeSmsSender(),
        store=store or FakeNotificationStore(),
        clock=lambda: FIXED_NOW,
    )


async def test_order_confirmation_scenario_uses_customer_language() -> None:
    email = FakeEmailSender()
    sms = FakeSmsSender()
    store = FakeNotificationStore()
    registry = _registry([_customer()], email=email, sms=sms, store=store)

    result = await registry.send_customer_order_confirmation(
        "cust-1", _order(), ITEMS, "123 Main St"
    )

    assert result.success is True
    assert result.details == {"inApp": True, "sms": True, "email": True, "errors": []}

    email_data, template = email.calls[0]
    assert template == EVENT_ORDER_CONFIRMATION
    assert email_data.language == "es"
    assert email_data.to == "a@b.com"
    assert email_data.payload.delivery_address == "123 Main St"
    assert email_data.payload.order_number == "42"

    sms_data, message_type = sms.calls[0]
    assert message_type == EVENT_ORDER_CONFIRMATION
    assert sms_data.to == "+15551234567"

    record = store.records[0]
    assert record.user_id == "cust-1"
    assert record.type == EVENT_ORDER_CONFIRMATION
    assert record.title == "Order #42 Confirmed"
    assert record.order_id == 42
    assert record.is_read is False
    assert record.created_at == FIXED_NOW


async def test_order_confirmation_sms_follows_email_flag_not_sms_flag() -> None:
    # Confirmation texts piggyback on the email opt-in; status updates do not.
    sms = FakeSmsSender()
    registry = _registry([_customer(sms_notifications=False)], sms=sms)

    result = await registry.send_customer_order_confirmation("cust-1", _order(), ITEMS)

    assert len(sms.calls) == 1
    assert result.details["sms"] is True


async def test_order_confirmation_without_email_opt_in_is_in_app_only() -> None:
    email = FakeEmailSender()
    sms = FakeSmsSender()
    registry = _registry(
        [_customer(email_notifications=False, sms_notifications=True)], email=email, sms=sms
    )

    result = await registry.send_customer_order_confirmation("cust-1", _order(), ITEMS)

    assert result.details == {"inApp": True, "sms": False, "email": False, "errors": []}
    assert email.calls == []
    assert sms.calls == []


async def test_missing_phone_skips_sms_without_error() -> None:
    sms = FakeSmsSender()
    registry = _registry([_customer(phone=None)], sms=sms)

    result = await registry.send_customer_order_confirmation("cust-1", _order(), ITEMS)

    assert result.details["sms"] is False
    assert result.details["errors"] == []
    assert sms.calls == []


async def test_alternative_email_is_used_when_primary_missing() -> None:
    email = FakeEmailSender()
    registry = _registry(
        [_customer(email=None, alternative_email="billing@b.com")], email=email
    )

    await registry.send_customer_order_confirmation("cust-1", _order(), ITEMS)

    assert email.calls[0][0].to == "billing@b.com"


async def test_missing_email_skips_email_without_error() -> None:
    email = FakeEmailSender()
    registry = _registry([_customer(email=None, phone=None)], email=email)

    result = await registry.send_customer_order_confirmation("cust-1", _order(), ITEMS)

    assert result.success is True
    assert result.details == {"inApp": True, "sms": False, "email": False, "errors": []}
    assert email.calls == []


def _channel_doubles(in_app_ok: bool, sms_ok: bool, email_ok: bool):
    store = FakeNotificationStore(True if in_app_ok else RuntimeError("db down"))
    sms = FakeSmsSender(
        SmsResult(success=True) if sms_ok else SmsResult(success=False, error="carrier error")
    )
    email = FakeEmailSender(email_ok)
    return store, sms, email


@pytest.mark.parametrize("in_app_ok", [True, False])
@pytest.mark.parametrize("sms_ok", [True, False])
@pytest.mark.parametrize("email_ok", [True, False])
async def test_channels_fail_independently(in_app_ok: bool, sms_ok: bool, email_ok: bool) -> None:
    store, sms, email = _channel_doubles(in_app_ok, sms_ok, email_ok)
    registry = _registry([_customer()], email=email, sms=sms, store=store)
    event = NotificationEvent(
        recipient_id="cust-1",
        payload=OrderNotePayload(order_number="42", note="Gate code 1234", order_id=42),
    )

    outcome = await registry.process_notification(
        _customer(), event, ChannelOptions(include_in_app=True, include_sms=True, include_email=True)
    )

    assert store.calls == 1
    assert len(sms.calls) == 1
    assert len(email.calls) == 1
    assert outcome.in_app is in_app_ok
    assert outcome.sms is sms_ok
    assert outcome.email is email_ok
    assert outcome.success is (in_app_ok or sms_ok or email_ok)

    expected_errors = []
    if not in_app_ok:
        expected_errors.append("In-app: db down")
    if not sms_ok:
        expected_errors.append("SMS: carrier error")
    if not email_ok:
        expected_errors.append("Email: delivery failed")
    assert outcome.errors == expected_errors


async def test_raising_senders_are_reported_per_channel() -> None:
    store = FakeNotificationStore(None)
    sms = FakeSmsSender(RuntimeError("twilio timeout"))
    email = FakeEmailSender(outcomes={"a@b.com": ConnectionError("sendgrid unreachable")})
    registry = _registry([_customer()], email=email, sms=sms, store=store)

    result = await registry.send_customer_order_confirmation("cust-1", _order(), ITEMS)

    assert result.success is False
    assert result.details["errors"] == [
        "In-app: notification was not stored",
        "SMS: twilio timeout",
        "Email: sendgrid unreachable",
    ]


async def test_status_update_gates_channels_by_their_own_flags() -> None:
    email = FakeEmailSender()
    sms = FakeSmsSender()
    store = FakeNotificationStore()
    registry = _registry(
        [_customer(email_notifications=True, sms_notifications=False)],
        email=email,
        sms=sms,
        store=store,
    )

    result = await registry.send_order_status_update(
        "cust-1", _order(), "ready", old_status="pending"
    )

    assert result.success is True
    assert sms.calls == []
    assert email.calls[0][1] == EVENT_ORDER_STATUS_UPDATE
    record = store.records[0]
    assert record.data == {"oldStatus": "pending", "newStatus": "ready"}
    assert record.title == "Order #42 ready"


async def test_status_update_sends_sms_when_sms_flag_set() -> None:
    email = FakeEmailSender()
    sms = FakeSmsSender()
    registry = _registry(
        [_customer(email_notifications=False, sms_notifications=True)], email=email, sms=sms
    )

    result = await registry.send_order_status_update("cust-1", _order(), "delivered")

    assert result.details == {"inApp": True, "sms": True, "email": False, "errors": []}
    assert email.calls == []


async def test_staff_alert_aggregates_recipients() -> None:
    staff = [_staff("staff-a"), _staff("staff-b"), _staff("staff-c")]
    store = FakeNotificationStore(outcomes={"staff-c": RuntimeError("db down")})
    email = FakeEmailSender(outcomes={"staff-c@example.com": False})
    registry = _registry([_customer(), *staff], email=email, store=store)

    result = await registry.send_staff_order_alert(_order(), ITEMS, _customer(), "123 Main St")

    assert result.success is True
    assert result.details["total"] == 3
    assert result.details["successful"] == 2
    assert len(result.details["results"]) == 3
    failed = [entry for entry in result.details["results"] if entry["errors"]]
    assert failed == [
        {
            "inApp": False,
            "sms": False,
            "email": False,
            "errors": ["In-app: db down", "Email: delivery failed"],
        }
    ]


async def test_staff_alert_uses_each_recipients_language() -> None:
    staff = [_staff("staff-a", preferred_language="es"), _staff("staff-b", preferred_language=None)]
    email = FakeEmailSender()
    registry = _registry(staff, email=email)

    await registry.send_staff_order_alert(_order(), ITEMS, _customer())

    languages = {data.to: data.language for data, _ in email.calls}
    assert languages == {"staff-a@example.com": "es", "staff-b@example.com": "en"}


async def test_staff_alert_without_staff_is_not_successful() -> None:
    registry = _registry([_customer()])

    result = await registry.send_staff_order_alert(_order(), ITEMS, _customer())

    assert result.success is False
    assert result.details == {"total": 0, "successful": 0, "results": []}


async def test_staff_alert_directory_failure_is_returned() -> None:
    registry = _registry([], directory=FakeUserDirectory(error=RuntimeError("directory offline")))

    result = await registry.send_staff_order_alert(_order(), ITEMS, _customer())

    assert result.success is False
    assert result.details == {"error": "directory offline"}


async def test_note_to_customer_only_notifies_order_owner() -> None:
    store = FakeNotificationStore()
    author = _staff("staff-a", first_name="Raj", last_name="Patel")
    registry = _registry([_customer(), author], store=store)

    result = await registry.send_order_note_notification(
        _order(), "Driver arrives at 3pm", author, notify_customer=True
    )

    assert result.success is True
    assert result.details["audience"] == "customer"
    assert result.details["total"] == 1
    assert [record.user_id for record in store.records] == ["cust-1"]
    record = store.records[0]
    assert record.type == EVENT_ORDER_NOTE
    assert record.data == {"note": "Driver arrives at 3pm", "fromUser": "Raj Patel"}


@pytest.mark.parametrize(
    ("sms_enabled", "email_enabled"),
    [(True, True), (True, False), (False, True), (False, False)],
)
async def test_note_to_customer_gates_channels_by_their_own_flags(
    sms_enabled: bool, email_enabled: bool
) -> None:
    email = FakeEmailSender()
    sms = FakeSmsSender()
    store = FakeNotificationStore()
    customer = _customer(sms_notifications=sms_enabled, email_notifications=email_enabled)
    registry = _registry([customer], email=email, sms=sms, store=store)

    result = await registry.send_order_note_notification(
        _order(), "Leave at loading dock", _staff("staff-a"), notify_customer=True
    )

    assert result.details["results"] == [
        {"inApp": True, "sms": sms_enabled, "email": email_enabled, "errors": []}
    ]
    assert len(sms.calls) == int(sms_enabled)
    assert len(email.calls) == int(email_enabled)
    assert store.calls == 1
    if sms_enabled:
        assert sms.calls[0][1] == EVENT_ORDER_NOTE
    if email_enabled:
        assert email.calls[0][1] == EVENT_ORDER_NOTE


async def test_note_defaults_to_staff_audience() -> None:
    store = FakeNotificationStore()
    staff = [_staff("staff-a"), _staff("staff-b")]
    registry = _registry([_customer(), *staff], store=store)

    result = await registry.send_order_note_notification(_order(), "Call before delivery", _customer())

    assert result.details["audience"] == "staff"
    assert result.details["total"] == 2
    assert sorted(record.user_id for record in store.records) == ["staff-a", "staff-b"]


async def test_account_approval_is_email_only() -> None:
    email = FakeEmailSender()
    sms = FakeSmsSender()
    store = FakeNotificationStore()
    customer = _customer(email_notifications=True, sms_notifications=True)
    registry = _registry([customer], email=email, sms=sms, store=store)

    result = await registry.send_account_approval_notification(
        customer, "corner-store", "Tmp12345", 3, 5000.0
    )

    assert result.success is True
    assert result.details == {"inApp": False, "sms": False, "email": True, "errors": []}
    assert store.calls == 0
    assert sms.calls == []
    data, template = email.calls[0]
    assert template == EVENT_ACCOUNT_APPROVED
    assert data.payload.password == "Tmp12345"
    assert data.payload.customer_level == 3


@pytest.mark.parametrize(
    "send",
    [
        lambda registry: registry.send_customer_order_confirmation("ghost", _order(), ITEMS),
        lambda registry: registry.send_order_status_update("ghost", _order(), "ready"),
        lambda registry: registry.send_order_note_notification(
            Order(id=7, user_id="ghost", total=1.0), "hi", _customer(), notify_customer=True
        ),
    ],
)
async def test_unknown_recipient_returns_error_result(send) -> None:
    registry = _registry([_customer()])

    result = await send(registry)

    assert result.success is False
    assert result.details == {"error": "Customer not found: ghost"}


def test_production_senders_and_fakes_satisfy_ports() -> None:
    from orderhub.domain.ports import EmailSender, NotificationStore, SmsSender, UserDirectory
    from orderhub.infrastructure.adapters import SqlNotificationStore, SqlUserDirectory
    from orderhub.infrastructure.email import SendGridEmailSender
    from orderhub.infrastructure.sms import TwilioSmsSender

    assert isinstance(FakeUserDirectory(), UserDirectory)
    assert isinstance(SqlUserDirectory(lambda: None), UserDirectory)
    assert isinstance(SendGridEmailSender(), EmailSender)
    assert isinstance(TwilioSmsSender(), SmsSender)
    assert isinstance(SqlNotificationStore(lambda: None), NotificationStore)
    assert isinstance(FakeNotificationStore(), NotificationStore)

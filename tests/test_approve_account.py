"""Tests for the customer account approval use case and the SQL adapters."""

from __future__ import annotations

import time

import anyio
import pytest

from conftest import FakeEmailSender, FakeSmsSender
from orderhub.application.use_cases.accounts import (
    CustomerNotFoundError,
    approve_customer_account,
)
from orderhub.application.use_cases.notifications import NotificationRegistry
from orderhub.domain.entities import Order, OrderItem, User
from orderhub.infrastructure import database
from orderhub.infrastructure.adapters import SqlNotificationStore, SqlUserDirectory
from orderhub.infrastructure.repositories import NotificationRepository, UserRepository
from orderhub.infrastructure.security import verify_password

pytestmark = pytest.mark.anyio


@pytest.fixture(autouse=True)
def setup_database():
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    yield
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture()
def registry(email_sender: FakeEmailSender) -> NotificationRegistry:
    return NotificationRegistry(
        users=SqlUserDirectory(database.SessionLocal),
        email_sender=email_sender,
        sms_sender=FakeSmsSender(),
        store=SqlNotificationStore(database.SessionLocal),
    )


def _seed(session) -> None:
    repository = UserRepository(session)
    repository.create(
        User(
            id="cust-1",
            username="corner-store",
            first_name="Ana",
            email="ana@example.com",
            phone="5551234567",
            preferred_language="es",
        )
    )
    repository.create(User(id="admin", username="admin", email="admin@example.com", is_admin=True))
    repository.create(
        User(id="clerk", username="clerk", email="clerk@example.com", is_employee=True)
    )


async def test_approval_stores_hashed_temporary_password(
    session, registry: NotificationRegistry, email_sender: FakeEmailSender
) -> None:
    _seed(session)

    approved, result = await approve_customer_account(
        session, registry, "cust-1", customer_level=4, credit_limit=1500
    )

    assert result.success is True
    assert approved.customer_level == 4
    assert approved.credit_limit == 1500
    assert approved.force_password_change is True

    data, _ = email_sender.calls[0]
    assert data.language == "es"
    assert data.payload.username == "corner-store"
    assert verify_password(data.payload.password, approved.password_hash)
    assert NotificationRepository(session).count_unread("cust-1") == 0


async def test_approval_is_kept_when_email_fails(session, email_sender) -> None:
    _seed(session)
    failing = NotificationRegistry(
        users=SqlUserDirectory(database.SessionLocal),
        email_sender=FakeEmailSender(default=False),
        sms_sender=FakeSmsSender(),
        store=SqlNotificationStore(database.SessionLocal),
    )

    approved, result = await approve_customer_account(
        session, failing, "cust-1", customer_level=2, credit_limit=0
    )

    assert result.success is False
    assert result.details["errors"] == ["Email: delivery failed"]
    assert approved.customer_level == 2


@pytest.mark.parametrize(
    ("level", "credit", "message"),
    [(0, 0, "Customer level"), (6, 0, "Customer level"), (2, -1, "Credit limit")],
)
async def test_approval_rejects_invalid_terms(session, registry, level, credit, message) -> None:
    _seed(session)

    with pytest.raises(ValueError, match=message):
        await approve_customer_account(
            session, registry, "cust-1", customer_level=level, credit_limit=credit
        )


async def test_approval_of_unknown_customer(session, registry) -> None:
    with pytest.raises(CustomerNotFoundError, match="Customer not found"):
        await approve_customer_account(
            session, registry, "ghost", customer_level=1, credit_limit=0
        )


def test_unknown_customer_is_not_a_validation_error() -> None:
    assert issubclass(CustomerNotFoundError, LookupError)
    assert not issubclass(CustomerNotFoundError, ValueError)


async def test_approval_does_not_block_the_event_loop(session, registry) -> None:
    _seed(session)
    gaps: list[float] = []

    async def tick(done: anyio.Event) -> None:
        last = time.perf_counter()
        while not done.is_set():
            await anyio.sleep(0.005)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    done = anyio.Event()
    async with anyio.create_task_group() as tg:
        tg.start_soon(tick, done)
        await anyio.sleep(0.02)
        await approve_customer_account(
            session, registry, "cust-1", customer_level=2, credit_limit=100
        )
        done.set()

    # Password hashing and the commit run in a worker thread.
    assert max(gaps) < 0.05


async def test_staff_alert_persists_in_app_records(session, registry) -> None:
    _seed(session)
    customer = UserRepository(session).get("cust-1")
    order = Order(id=42, user_id="cust-1", total=60.0)

    result = await registry.send_staff_order_alert(
        order, [OrderItem(product_name="Rice 20lb", quantity=2, price=30.0)], customer
    )

    assert result.details["total"] == 2
    assert result.details["successful"] == 2
    notifications = NotificationRepository(session)
    for user_id in ("admin", "clerk"):
        [record] = notifications.list_for_user(user_id)
        assert record.title == "New Order #42"
        assert record.message == "Ana placed a new order for $60.00. Review and process the order."
        assert record.order_id == 42
        assert record.created_at.tzinfo is not None
    assert notifications.count_unread("cust-1") == 0


async def test_status_update_persists_extra_data(session, registry) -> None:
    _seed(session)

    result = await registry.send_order_status_update(
        "cust-1", Order(id=42, user_id="cust-1", total=60.0), "ready", old_status="pending"
    )

    assert result.details["inApp"] is True
    [record] = NotificationRepository(session).list_for_user("cust-1")
    assert record.data == {"oldStatus": "pending", "newStatus": "ready"}
    assert record.is_read is False

"""Use case for approving a wholesale customer account."""

from __future__ import annotations

import logging
from dataclasses import replace

from anyio import to_thread
from sqlalchemy.orm import Session

from orderhub.application.use_cases.notifications import NotificationRegistry
from orderhub.domain.entities import DispatchResult, User
from orderhub.infrastructure.repositories import UserRepository
from orderhub.infrastructure.security import generate_temporary_password, get_password_hash

logger = logging.getLogger(__name__)

MIN_CUSTOMER_LEVEL = 1
MAX_CUSTOMER_LEVEL = 5


class CustomerNotFoundError(LookupError):
    """Raised when the account to approve does not exist."""


def _store_approval(
    session: Session, customer_id: str, customer_level: int, credit_limit: float
) -> tuple[User, str]:
    repository = UserRepository(session)
    customer = repository.get(customer_id)
    if customer is None:
        raise CustomerNotFoundError("Customer not found")

    temporary_password = generate_temporary_password()
    approved = repository.update(
        replace(
            customer,
            customer_level=customer_level,
            credit_limit=credit_limit,
            password_hash=get_password_hash(temporary_password),
            force_password_change=True,
        )
    )
    return approved, temporary_password


async def approve_customer_account(
    session: Session,
    registry: NotificationRegistry,
    customer_id: str,
    *,
    customer_level: int,
    credit_limit: float,
) -> tuple[User, DispatchResult]:
    """Activate pricing tier and credit for a customer and email the credentials.

    A temporary password is generated and stored hashed; the customer must
    change it on first login. Hashing and the database update run in a worker
    thread. The approval is kept even when the email could not be delivered;
    the returned :class:`DispatchResult` tells the caller.

    Raises ``ValueError`` for invalid terms and :class:`CustomerNotFoundError`
    when ``customer_id`` is unknown.
    """

    if not MIN_CUSTOMER_LEVEL <= customer_level <= MAX_CUSTOMER_LEVEL:
        raise ValueError(
            f"Customer level must be between {MIN_CUSTOMER_LEVEL} and {MAX_CUSTOMER_LEVEL}"
        )
    if credit_limit < 0:
        raise ValueError("Credit limit cannot be negative")

    approved, temporary_password = await to_thread.run_sync(
        lambda: _store_approval(session, customer_id, customer_level, credit_limit)
    )
    logger.info(
        "Approved account %s at level %s with credit limit %.2f",
        approved.id,
        customer_level,
        credit_limit,
    )

    result = await registry.send_account_approval_notification(
        approved,
        approved.username,
        temporary_password,
        customer_level,
        credit_limit,
    )
    if not result.success:
        logger.warning("Approval email for account %s was not delivered", approved.id)
    return approved, result

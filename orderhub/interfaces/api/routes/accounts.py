"""Administrative endpoints for customer accounts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from orderhub.application.use_cases.accounts import (
    CustomerNotFoundError,
    approve_customer_account,
)
from orderhub.application.use_cases.notifications import NotificationRegistry
from orderhub.domain.entities import User
from orderhub.infrastructure.database import get_db
from orderhub.interfaces.api.dependencies import get_registry, require_admin
from orderhub.interfaces.api.schemas import (
    AccountApprovalRequest,
    AccountApprovalResponse,
    DispatchResultRead,
)

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/{customer_id}/approve", response_model=AccountApprovalResponse)
async def approve_account(
    customer_id: str,
    payload: AccountApprovalRequest,
    db: Session = Depends(get_db),
    registry: NotificationRegistry = Depends(get_registry),
    _: User = Depends(require_admin),
) -> AccountApprovalResponse:
    """Approve a customer account and email the temporary credentials."""

    try:
        customer, result = await approve_customer_account(
            db,
            registry,
            customer_id,
            customer_level=payload.customer_level,
            credit_limit=payload.credit_limit,
        )
    except CustomerNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return AccountApprovalResponse(
        user_id=customer.id,
        username=customer.username,
        customer_level=customer.customer_level,
        credit_limit=customer.credit_limit,
        notification=DispatchResultRead(success=result.success, details=result.details),
    )

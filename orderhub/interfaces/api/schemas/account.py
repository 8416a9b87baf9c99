"""Pydantic models for account administration endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AccountApprovalRequest(BaseModel):
    customer_level: int = Field(..., ge=1, le=5, description="Pricing tier (1-5)")
    credit_limit: float = Field(0.0, ge=0, description="Credit limit in dollars")


class DispatchResultRead(BaseModel):
    """Outcome of a notification dispatch as reported to the caller."""

    success: bool
    details: dict[str, Any] = Field(default_factory=dict)


class AccountApprovalResponse(BaseModel):
    user_id: str
    username: str
    customer_level: int
    credit_limit: float
    notification: DispatchResultRead


__all__ = ["AccountApprovalRequest", "AccountApprovalResponse", "DispatchResultRead"]

"""Pydantic schemas exposed by the HTTP API."""

from .account import AccountApprovalRequest, AccountApprovalResponse, DispatchResultRead
from .notification import NotificationMarkReadRequest, NotificationRead, UnreadCountRead

__all__ = [
    "AccountApprovalRequest",
    "AccountApprovalResponse",
    "DispatchResultRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "UnreadCountRead",
]

"""Use cases for managing customer accounts."""

from .approve_customer_account import CustomerNotFoundError, approve_customer_account

__all__ = ["CustomerNotFoundError", "approve_customer_account"]

"""Domain entity representing a customer, employee or administrator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_LANGUAGE = "en"


@dataclass
class User:
    """Account attributes relevant to ordering and notification routing."""

    id: str
    username: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    alternative_email: str | None = None
    phone: str | None = None
    business_name: str | None = None
    preferred_language: str | None = DEFAULT_LANGUAGE
    email_notifications: bool = True
    sms_notifications: bool = False
    sms_consent_given: bool = False
    transactional_sms_consent: bool = False
    marketing_sms_consent: bool = False
    sms_opt_out_at: datetime | None = None
    is_admin: bool = False
    is_employee: bool = False
    customer_level: int = 1
    credit_limit: float = 0.0
    password_hash: str | None = None
    force_password_change: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Return ``first last`` or the username when no name is stored."""

        full_name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full_name or self.username

    @property
    def contact_email(self) -> str | None:
        return self.email or self.alternative_email

    @property
    def language(self) -> str:
        return self.preferred_language or DEFAULT_LANGUAGE

    def is_staff(self) -> bool:
        """Return ``True`` for employees and administrators."""

        return self.is_admin or self.is_employee


__all__ = ["DEFAULT_LANGUAGE", "User"]

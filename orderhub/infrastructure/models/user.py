"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, func
from sqlalchemy.sql import expression

from orderhub.infrastructure.database import Base


class UserModel(Base):
    """Database representation of customers, employees and administrators."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    alternative_email = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    business_name = Column(String(255), nullable=True)
    preferred_language = Column(String(8), nullable=True, default="en")

    email_notifications = Column(Boolean, nullable=False, default=True)
    sms_notifications = Column(Boolean, nullable=False, default=False)
    sms_consent_given = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    transactional_sms_consent = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    marketing_sms_consent = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    sms_opt_out_at = Column(DateTime, nullable=True)

    is_admin = Column(Boolean, nullable=False, default=False, index=True)
    is_employee = Column(Boolean, nullable=False, default=False, index=True)
    customer_level = Column(Integer, nullable=False, default=1)
    credit_limit = Column(Float, nullable=False, default=0.0)
    password_hash = Column(String(255), nullable=True)
    force_password_change = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["UserModel"]

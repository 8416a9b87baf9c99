"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from orderhub.domain.entities import User
from orderhub.infrastructure.models import UserModel
from orderhub.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide lookups and updates for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = self.session.query(UserModel).filter_by(username=username).first()
        return self._to_entity(model) if model else None

    def list_staff_and_admins(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(or_(UserModel.is_admin.is_(True), UserModel.is_employee.is_(True)))
            .order_by(UserModel.username)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(id=user.id)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if model is None:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.username = user.username
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.email = user.email
        model.alternative_email = user.alternative_email
        model.phone = user.phone
        model.business_name = user.business_name
        model.preferred_language = user.preferred_language
        model.email_notifications = user.email_notifications
        model.sms_notifications = user.sms_notifications
        model.sms_consent_given = user.sms_consent_given
        model.transactional_sms_consent = user.transactional_sms_consent
        model.marketing_sms_consent = user.marketing_sms_consent
        model.sms_opt_out_at = ensure_app_naive_datetime(user.sms_opt_out_at)
        model.is_admin = user.is_admin
        model.is_employee = user.is_employee
        model.customer_level = user.customer_level
        model.credit_limit = user.credit_limit
        model.password_hash = user.password_hash
        model.force_password_change = user.force_password_change

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            alternative_email=model.alternative_email,
            phone=model.phone,
            business_name=model.business_name,
            preferred_language=model.preferred_language,
            email_notifications=bool(model.email_notifications),
            sms_notifications=bool(model.sms_notifications),
            sms_consent_given=bool(model.sms_consent_given),
            transactional_sms_consent=bool(model.transactional_sms_consent),
            marketing_sms_consent=bool(model.marketing_sms_consent),
            sms_opt_out_at=ensure_app_timezone(model.sms_opt_out_at),
            is_admin=bool(model.is_admin),
            is_employee=bool(model.is_employee),
            customer_level=model.customer_level,
            credit_limit=model.credit_limit,
            password_hash=model.password_hash,
            force_password_change=bool(model.force_password_change),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


__all__ = ["UserRepository"]

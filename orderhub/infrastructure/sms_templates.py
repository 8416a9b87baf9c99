"""Short multilingual SMS bodies for each notification type."""

from __future__ import annotations

from orderhub.domain.entities import (
    GeneralPayload,
    OrderConfirmationPayload,
    OrderNotePayload,
    OrderStatusUpdatePayload,
    SmsData,
    StaffOrderAlertPayload,
)

from .email_templates import FALLBACK_LANGUAGE, format_money

_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "order_confirmation": (
            "{company}: Hi {name}, your order #{order_number} for {total} is confirmed. "
            "{delivery}."
        ),
        "staff_new_order_alert": (
            "{company}: New order #{order_number} from {customer} for {total} "
            "({item_count} items). Please review it in the app."
        ),
        "order_status_update": "{company}: Order #{order_number} is now {status}.",
        "order_note": '{company}: {author} added a note to order #{order_number}: "{note}"',
        "general": "{company}: {message}",
        "general_default": "You have a new notification.",
        "delivery_to": "Delivery to {address}",
        "pickup": "Pickup at store",
        "default_author": "Staff",
        "opt_out": "Reply STOP to opt out.",
    },
    "es": {
        "order_confirmation": (
            "{company}: Hola {name}, su pedido #{order_number} por {total} está confirmado. "
            "{delivery}."
        ),
        "staff_new_order_alert": (
            "{company}: Nuevo pedido #{order_number} de {customer} por {total} "
            "({item_count} artículos). Revíselo en la aplicación."
        ),
        "order_status_update": "{company}: El pedido #{order_number} ahora está {status}.",
        "order_note": '{company}: {author} agregó una nota al pedido #{order_number}: "{note}"',
        "general": "{company}: {message}",
        "general_default": "Tiene una nueva notificación.",
        "delivery_to": "Entrega en {address}",
        "pickup": "Recoger en la tienda",
        "default_author": "Personal",
        "opt_out": "Responda STOP para cancelar.",
    },
}


def _catalog(language: str | None) -> dict[str, str]:
    code = (language or FALLBACK_LANGUAGE).split("-")[0].lower()
    return _MESSAGES.get(code, _MESSAGES[FALLBACK_LANGUAGE])


def render_sms(message_type: str, data: SmsData, company: str) -> str:
    """Return the SMS body for ``data``; the opt-out footer is always appended.

    Account approvals travel by email only, so they have no SMS body and are
    rejected like any unknown payload.
    """

    text = _catalog(data.language)
    payload = data.payload

    if isinstance(payload, OrderConfirmationPayload):
        delivery = (
            text["delivery_to"].format(address=payload.delivery_address)
            if payload.delivery_address
            else text["pickup"]
        )
        body = text["order_confirmation"].format(
            company=company,
            name=data.recipient_name,
            order_number=payload.order_number,
            total=format_money(payload.order_total),
            delivery=delivery,
        )
    elif isinstance(payload, StaffOrderAlertPayload):
        body = text["staff_new_order_alert"].format(
            company=company,
            order_number=payload.order_number,
            customer=payload.customer_name,
            total=format_money(payload.order_total),
            item_count=len(payload.order_items),
        )
    elif isinstance(payload, OrderStatusUpdatePayload):
        body = text["order_status_update"].format(
            company=company, order_number=payload.order_number, status=payload.order_status
        )
    elif isinstance(payload, OrderNotePayload):
        body = text["order_note"].format(
            company=company,
            author=payload.author or text["default_author"],
            order_number=payload.order_number,
            note=payload.note,
        )
    elif isinstance(payload, GeneralPayload):
        body = text["general"].format(
            company=company, message=payload.message or text["general_default"]
        )
    else:
        raise ValueError(f"Unknown SMS message type: {message_type}")

    return f"{body} {text['opt_out']}"


__all__ = ["render_sms"]

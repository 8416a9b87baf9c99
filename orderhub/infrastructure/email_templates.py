"""Pre-built multilingual email templates.

Templates are plain string catalogs keyed by language; the values coming from
an order or an account are escaped and substituted when a message is
rendered. Languages without a catalog fall back to English.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from html import escape

from orderhub.domain.entities import (
    EVENT_ACCOUNT_APPROVED,
    EVENT_GENERAL,
    EVENT_ORDER_CONFIRMATION,
    EVENT_ORDER_NOTE,
    EVENT_ORDER_STATUS_UPDATE,
    EVENT_STAFF_NEW_ORDER_ALERT,
    AccountApprovedPayload,
    EmailData,
    GeneralPayload,
    OrderConfirmationPayload,
    OrderItem,
    OrderNotePayload,
    OrderStatusUpdatePayload,
    StaffOrderAlertPayload,
)

FALLBACK_LANGUAGE = "en"

_PHRASES: dict[str, dict[str, str]] = {
    "en": {
        "greeting": "Dear {name},",
        "closing": "Best regards,",
        "questions": "Questions? Contact us at {support_email} or {phone}.",
        "pickup": "Pickup at store",
        "order_number": "Order Number",
        "total": "Total Amount",
        "delivery": "Delivery Address",
        "items": "Items",
        "customer": "Customer",
        "confirmation_subject": "Order Confirmation #{order_number} - {company}",
        "confirmation_heading": "Order Confirmation",
        "confirmation_intro": "Thank you for your order! We're excited to serve you.",
        "staff_subject": "New Order #{order_number} - {customer}",
        "staff_heading": "New Order Alert",
        "staff_intro": "{customer} placed a new order.",
        "staff_action": "ACTION REQUIRED: Please review and process the order in the app.",
        "status_subject": "Order #{order_number} Status Update - {company}",
        "status_heading": "Order Status Update",
        "status_intro": "The status of your order #{order_number} has been updated.",
        "previous_status": "Previous Status",
        "new_status": "New Status",
        "note_subject": "New Note on Order #{order_number} - {company}",
        "note_heading": "New Order Note",
        "note_intro": "{author} added a note to order #{order_number}:",
        "note_default_author": "Staff",
        "approved_subject": "Your Wholesale Account Has Been Approved - {company}",
        "approved_heading": "Account Approved",
        "approved_intro": (
            "Congratulations! Your wholesale account request has been approved. "
            "You can now access our full product catalog with wholesale pricing."
        ),
        "business": "Business",
        "username": "Username",
        "password": "Temporary Password",
        "customer_level": "Customer Level",
        "credit_limit": "Credit Limit",
        "change_password": "Please change your password after your first login for security.",
        "general_subject": "Notification from {company}",
        "general_heading": "Notification",
        "general_body": "You have a new notification.",
    },
    "es": {
        "greeting": "Estimado/a {name},",
        "closing": "Saludos cordiales,",
        "questions": "¿Preguntas? Contáctenos en {support_email} o al {phone}.",
        "pickup": "Recoger en la tienda",
        "order_number": "Número de pedido",
        "total": "Monto total",
        "delivery": "Dirección de entrega",
        "items": "Artículos",
        "customer": "Cliente",
        "confirmation_subject": "Confirmación de pedido #{order_number} - {company}",
        "confirmation_heading": "Confirmación de pedido",
        "confirmation_intro": "¡Gracias por su pedido! Estamos encantados de atenderle.",
        "staff_subject": "Nuevo pedido #{order_number} - {customer}",
        "staff_heading": "Alerta de nuevo pedido",
        "staff_intro": "{customer} realizó un nuevo pedido.",
        "staff_action": "ACCIÓN REQUERIDA: revise y procese el pedido en la aplicación.",
        "status_subject": "Actualización del pedido #{order_number} - {company}",
        "status_heading": "Actualización de estado del pedido",
        "status_intro": "El estado de su pedido #{order_number} ha sido actualizado.",
        "previous_status": "Estado anterior",
        "new_status": "Nuevo estado",
        "note_subject": "Nueva nota en el pedido #{order_number} - {company}",
        "note_heading": "Nueva nota del pedido",
        "note_intro": "{author} agregó una nota al pedido #{order_number}:",
        "note_default_author": "Personal",
        "approved_subject": "Su cuenta mayorista ha sido aprobada - {company}",
        "approved_heading": "Cuenta aprobada",
        "approved_intro": (
            "¡Felicidades! Su solicitud de cuenta mayorista ha sido aprobada. "
            "Ya puede acceder a nuestro catálogo completo con precios mayoristas."
        ),
        "business": "Empresa",
        "username": "Usuario",
        "password": "Contraseña temporal",
        "customer_level": "Nivel de cliente",
        "credit_limit": "Límite de crédito",
        "change_password": "Por seguridad, cambie su contraseña después de su primer inicio de sesión.",
        "general_subject": "Notificación de {company}",
        "general_heading": "Notificación",
        "general_body": "Tiene una nueva notificación.",
    },
}

SUPPORTED_LANGUAGES = tuple(_PHRASES)


@dataclass(frozen=True)
class CompanyInfo:
    name: str
    phone: str
    support_email: str


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html_content: str
    text_content: str


@dataclass(frozen=True)
class _Body:
    """Language-resolved pieces of a message before HTML/text assembly."""

    subject: str
    heading: str
    paragraphs: Sequence[str]
    rows: Sequence[tuple[str, str]] = ()
    items: Sequence[OrderItem] = ()
    notice: str | None = None


def phrases_for(language: str | None) -> dict[str, str]:
    """Return the phrase catalog for ``language`` (English when unknown)."""

    code = (language or FALLBACK_LANGUAGE).split("-")[0].lower()
    return _PHRASES.get(code, _PHRASES[FALLBACK_LANGUAGE])


def format_money(amount: float | None) -> str:
    return f"${amount or 0:,.2f}"


def _order_confirmation(payload: OrderConfirmationPayload, text: dict[str, str], company: CompanyInfo) -> _Body:
    return _Body(
        subject=text["confirmation_subject"].format(
            order_number=payload.order_number, company=company.name
        ),
        heading=text["confirmation_heading"],
        paragraphs=[text["confirmation_intro"]],
        rows=[
            (text["order_number"], f"#{payload.order_number}"),
            (text["total"], format_money(payload.order_total)),
            (text["delivery"], payload.delivery_address or text["pickup"]),
        ],
        items=payload.order_items,
    )


def _staff_alert(payload: StaffOrderAlertPayload, text: dict[str, str], company: CompanyInfo) -> _Body:
    return _Body(
        subject=text["staff_subject"].format(
            order_number=payload.order_number, customer=payload.customer_name
        ),
        heading=text["staff_heading"],
        paragraphs=[text["staff_intro"].format(customer=payload.customer_name)],
        rows=[
            (text["order_number"], f"#{payload.order_number}"),
            (text["customer"], payload.customer_name),
            (text["total"], format_money(payload.order_total)),
            (text["items"], str(len(payload.order_items))),
            (text["delivery"], payload.delivery_address or text["pickup"]),
        ],
        items=payload.order_items,
        notice=text["staff_action"],
    )


def _status_update(payload: OrderStatusUpdatePayload, text: dict[str, str], company: CompanyInfo) -> _Body:
    rows = [(text["order_number"], f"#{payload.order_number}")]
    if payload.old_status:
        rows.append((text["previous_status"], payload.old_status))
    rows.append((text["new_status"], payload.order_status))
    if payload.order_total is not None:
        rows.append((text["total"], format_money(payload.order_total)))
    return _Body(
        subject=text["status_subject"].format(
            order_number=payload.order_number, company=company.name
        ),
        heading=text["status_heading"],
        paragraphs=[text["status_intro"].format(order_number=payload.order_number)],
        rows=rows,
    )


def _order_note(payload: OrderNotePayload, text: dict[str, str], company: CompanyInfo) -> _Body:
    author = payload.author or text["note_default_author"]
    return _Body(
        subject=text["note_subject"].format(
            order_number=payload.order_number, company=company.name
        ),
        heading=text["note_heading"],
        paragraphs=[
            text["note_intro"].format(author=author, order_number=payload.order_number),
            f"“{payload.note}”",
        ],
    )


def _account_approved(payload: AccountApprovedPayload, text: dict[str, str], company: CompanyInfo) -> _Body:
    rows = []
    if payload.business_name:
        rows.append((text["business"], payload.business_name))
    rows.extend(
        [
            (text["username"], payload.username),
            (text["password"], payload.password),
            (text["customer_level"], str(payload.customer_level)),
            (text["credit_limit"], format_money(payload.credit_limit)),
        ]
    )
    return _Body(
        subject=text["approved_subject"].format(company=company.name),
        heading=text["approved_heading"],
        paragraphs=[text["approved_intro"]],
        rows=rows,
        notice=text["change_password"],
    )


def _general(payload: GeneralPayload, text: dict[str, str], company: CompanyInfo) -> _Body:
    return _Body(
        subject=text["general_subject"].format(company=company.name),
        heading=text["general_heading"],
        paragraphs=[payload.message or text["general_body"]],
    )


_RENDERERS: dict[str, tuple[type, Callable[..., _Body]]] = {
    EVENT_ORDER_CONFIRMATION: (OrderConfirmationPayload, _order_confirmation),
    EVENT_STAFF_NEW_ORDER_ALERT: (StaffOrderAlertPayload, _staff_alert),
    EVENT_ORDER_STATUS_UPDATE: (OrderStatusUpdatePayload, _status_update),
    EVENT_ORDER_NOTE: (OrderNotePayload, _order_note),
    EVENT_ACCOUNT_APPROVED: (AccountApprovedPayload, _account_approved),
    EVENT_GENERAL: (GeneralPayload, _general),
}


def render_email(template_type: str, data: EmailData, company: CompanyInfo) -> RenderedEmail:
    """Render the ``template_type`` email for ``data`` in ``data.language``.

    Raises ``ValueError`` for unknown template types and ``TypeError`` when the
    payload does not belong to the requested template.
    """

    try:
        payload_type, renderer = _RENDERERS[template_type]
    except KeyError as exc:
        raise ValueError(f"Unknown email template: {template_type}") from exc
    if not isinstance(data.payload, payload_type):
        raise TypeError(
            f"Template {template_type} cannot render {type(data.payload).__name__}"
        )

    text = phrases_for(data.language)
    body = renderer(data.payload, text, company)
    greeting = text["greeting"].format(name=data.recipient_name)
    footer = text["questions"].format(
        support_email=company.support_email, phone=company.phone
    )
    return RenderedEmail(
        subject=body.subject,
        html_content=_to_html(body, greeting, footer, text, company),
        text_content=_to_text(body, greeting, footer, text, company),
    )


def _to_html(
    body: _Body, greeting: str, footer: str, text: dict[str, str], company: CompanyInfo
) -> str:
    parts = [
        "<div style=\"font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;\">",
        f"<h1 style=\"color: #1d4ed8;\">{escape(body.heading)}</h1>",
        f"<p>{escape(greeting)}</p>",
    ]
    parts.extend(f"<p>{escape(paragraph)}</p>" for paragraph in body.paragraphs)
    if body.rows:
        parts.append("<table style=\"border-collapse: collapse;\">")
        parts.extend(
            f"<tr><td><strong>{escape(label)}:</strong></td><td>{escape(value)}</td></tr>"
            for label, value in body.rows
        )
        parts.append("</table>")
    if body.items:
        parts.append(f"<h3>{escape(text['items'])}</h3><ul>")
        parts.extend(
            f"<li>{escape(item.product_name)} &times; {item.quantity} "
            f"({escape(format_money(item.line_total))})</li>"
            for item in body.items
        )
        parts.append("</ul>")
    if body.notice:
        parts.append(f"<p style=\"color: #dc2626; font-weight: bold;\">{escape(body.notice)}</p>")
    parts.extend(
        [
            f"<p>{escape(footer)}</p>",
            f"<p>{escape(text['closing'])}<br>{escape(company.name)}</p>",
            "</div>",
        ]
    )
    return "".join(parts)


def _to_text(
    body: _Body, greeting: str, footer: str, text: dict[str, str], company: CompanyInfo
) -> str:
    lines = [body.heading, "", greeting, ""]
    lines.extend(body.paragraphs)
    if body.rows:
        lines.append("")
        lines.extend(f"- {label}: {value}" for label, value in body.rows)
    if body.items:
        lines.extend(["", f"{text['items']}:"])
        lines.extend(
            f"- {item.product_name} x {item.quantity} ({format_money(item.line_total)})"
            for item in body.items
        )
    if body.notice:
        lines.extend(["", body.notice])
    lines.extend(["", footer, "", text["closing"], company.name])
    return "\n".join(lines)


__all__ = [
    "CompanyInfo",
    "FALLBACK_LANGUAGE",
    "RenderedEmail",
    "SUPPORTED_LANGUAGES",
    "format_money",
    "phrases_for",
    "render_email",
]

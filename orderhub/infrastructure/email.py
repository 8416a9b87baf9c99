"""Transactional email delivery through SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from anyio import to_thread
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from orderhub.config import Settings, get_settings
from orderhub.domain.entities import EmailData

from .email_templates import CompanyInfo, render_email

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        messages = []
        for item in parsed.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            field = item.get("field")
            message = str(item["message"])
            messages.append(f"{field}: {message}" if field else message)
        if messages:
            return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_sendgrid_failure(status_code: Any, body: Any, recipient: str) -> None:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error(
            "SendGrid rejected email to %s with status %s: %s", recipient, status_code, details
        )
    elif status_code:
        logger.error("SendGrid rejected email to %s with status %s", recipient, status_code)
    elif details:
        logger.error("SendGrid rejected email to %s: %s", recipient, details)
    else:
        logger.error("SendGrid rejected email to %s", recipient)


def send_email(
    subject: str,
    html_content: str,
    recipient: str,
    *,
    text_content: str | None = None,
    settings: Settings | None = None,
) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = settings or get_settings()
    if not settings.email_enabled:
        logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        plain_text_content=text_content,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        status_code = getattr(exc, "status_code", None)
        body = getattr(exc, "body", None)
        if status_code is None and body is None:
            logger.exception("Error sending email via SendGrid to %s", recipient)
        else:
            _log_sendgrid_failure(status_code, body, recipient)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None), recipient)
        return False

    logger.info("Email %r sent to %s", subject, recipient)
    return True


class SendGridEmailSender:
    """Render notification templates and deliver them through SendGrid."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._company = CompanyInfo(
            name=self._settings.company_name,
            phone=self._settings.company_phone,
            support_email=self._settings.support_email,
        )

    async def send_email(self, data: EmailData, template_type: str) -> bool:
        rendered = render_email(template_type, data, self._company)
        return await to_thread.run_sync(
            lambda: send_email(
                rendered.subject,
                rendered.html_content,
                data.to,
                text_content=rendered.text_content,
                settings=self._settings,
            )
        )


__all__ = ["SendGridEmailSender", "send_email"]

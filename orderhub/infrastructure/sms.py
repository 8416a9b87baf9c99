"""SMS delivery through Twilio with TCPA consent enforcement."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any

from anyio import to_thread
from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from orderhub.config import Settings, get_settings
from orderhub.domain.entities import EVENT_GENERAL, SmsConsent, SmsData, SmsResult

from .sms_templates import render_sms

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")

CONSENT_MISSING = "SMS consent not given"
NOT_CONFIGURED = "SMS service not configured"


def normalize_phone_number(raw: str | None, *, default_country_code: str = "1") -> str | None:
    """Return ``raw`` in E.164 format or ``None`` when it cannot be a phone number.

    Ten-digit numbers are treated as national numbers of ``default_country_code``.
    """

    if not raw:
        return None
    digits = _NON_DIGITS.sub("", raw)
    if raw.strip().startswith("+"):
        return f"+{digits}" if 8 <= len(digits) <= 15 else None
    if len(digits) == 10:
        return f"+{default_country_code}{digits}"
    if len(digits) == 11 and digits.startswith(default_country_code):
        return f"+{digits}"
    return None


def has_sms_consent(consent: SmsConsent, message_type: str) -> bool:
    """Return ``True`` when the recipient agreed to receive ``message_type``.

    Opt-outs always win. Marketing texts need marketing consent; every other
    type is transactional.
    """

    if consent.opted_out:
        return False
    if message_type == EVENT_GENERAL:
        return consent.marketing
    return consent.given or consent.transactional


class TwilioSmsSender:
    """Check consent, render the body and deliver texts through Twilio."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client_factory: Callable[[str, str], Any] = Client,
    ) -> None:
        self._settings = settings or get_settings()
        self._client_factory = client_factory

    async def send_sms(self, data: SmsData, message_type: str) -> SmsResult:
        if not has_sms_consent(data.consent, message_type):
            logger.info("Skipping %s SMS to %s: no consent on file", message_type, data.to)
            return SmsResult(success=False, error=CONSENT_MISSING)

        if not self._settings.sms_enabled:
            logger.info("Twilio configuration incomplete; skipping SMS to %s", data.to)
            return SmsResult(success=False, error=NOT_CONFIGURED)

        destination = normalize_phone_number(data.to)
        if destination is None:
            logger.warning("Cannot send SMS to invalid phone number %r", data.to)
            return SmsResult(success=False, error=f"Invalid phone number: {data.to}")

        body = render_sms(message_type, data, self._settings.company_name)
        return await to_thread.run_sync(lambda: self._deliver(destination, body))

    def _deliver(self, destination: str, body: str) -> SmsResult:
        try:
            client = self._client_factory(
                self._settings.twilio_account_sid, self._settings.twilio_auth_token
            )
            message = client.messages.create(
                to=destination, from_=self._settings.twilio_from_number, body=body
            )
        except TwilioRestException as exc:
            logger.error(
                "Twilio rejected SMS to %s with status %s (code %s): %s",
                destination,
                exc.status,
                exc.code,
                exc.msg,
            )
            return SmsResult(success=False, error=exc.msg or f"Twilio error {exc.status}")

        logger.info("SMS %s sent to %s", message.sid, destination)
        return SmsResult(success=True, message_id=message.sid)


__all__ = [
    "CONSENT_MISSING",
    "NOT_CONFIGURED",
    "TwilioSmsSender",
    "has_sms_consent",
    "normalize_phone_number",
]

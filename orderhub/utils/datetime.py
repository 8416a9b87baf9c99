"""Timestamps for notification records expressed in the store's timezone."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from orderhub.config import get_settings

logger = logging.getLogger(__name__)

_FALLBACK_TIMEZONE: Final[str] = "America/Chicago"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``.

    Accepts IANA names (``America/Chicago``) and fixed offsets
    (``UTC-06:00``). Unknown values fall back to ``America/Chicago``.
    """

    name = (get_settings().app_timezone or "").strip() or _FALLBACK_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _UTC_OFFSET.match(name)
        if match is None:
            logger.warning("Unknown APP_TIMEZONE %r; using %s", name, _FALLBACK_TIMEZONE)
            return ZoneInfo(_FALLBACK_TIMEZONE)
        offset = timedelta(
            hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
        )
        return timezone(-offset if match.group("sign") == "-" else offset)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach (naive) or convert (aware) ``value`` to the app timezone."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return the local wall-clock time of ``value`` without ``tzinfo``.

    ``DateTime`` columns are stored naive; the domain layer keeps aware values.
    """

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


__all__ = [
    "get_app_timezone",
    "now_in_app_timezone",
    "ensure_app_timezone",
    "ensure_app_naive_datetime",
]

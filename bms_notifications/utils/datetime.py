"""Timestamps for notifications, expressed in the configured ``APP_TIMEZONE``."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from bms_notifications.config import get_settings

_FIXED_OFFSET = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach (naive input) or convert to (aware input) the app timezone."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=_app_timezone())
    return value.astimezone(_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` in the app timezone with ``tzinfo`` stripped, as stored in the DB."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


@lru_cache(maxsize=1)
def _app_timezone() -> tzinfo:
    return _resolve_timezone(get_settings().app_timezone.strip())


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve an IANA name or a ``UTC±HH[:MM]`` offset; anything else is UTC."""

    match = _FIXED_OFFSET.match(tz_name)
    if match:
        sign = -1 if match.group("sign") == "-" else 1
        offset = timedelta(
            hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
        )
        return timezone(sign * offset)
    try:
        return ZoneInfo(tz_name or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc

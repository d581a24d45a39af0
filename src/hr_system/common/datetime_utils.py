from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError

_timezone_name = DEFAULT_TIMEZONE


def set_local_timezone(name: str) -> None:
    """Select the regional calendar used to turn instants into dates."""
    global _timezone_name
    ZoneInfo(name)
    _timezone_name = name


def local_timezone() -> ZoneInfo:
    return ZoneInfo(_timezone_name)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def to_local_date(value: Union[date, datetime], tz: Optional[ZoneInfo] = None) -> date:
    """Calendar date of ``value`` in the regional calendar.

    Aware datetimes are converted first; naive ones are taken as already local.
    Plain dates pass through unchanged.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or local_timezone())
        return value.date()
    return value


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(local_timezone())

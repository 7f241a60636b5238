from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_TIME_FORMATS = ("%H:%M:%S", "%H:%M", "%I:%M %p", "%I:%M:%S %p")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_timestamp(value, *, on_date: Optional[date] = None) -> Optional[datetime]:
    """Parse an API timestamp into a naive UTC datetime.

    Accepts ISO-8601 (with or without offset / trailing ``Z``) and bare
    clock times such as ``09:00:00``, which are anchored to ``on_date``
    (or 1900-01-01). Returns None instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        parsed = None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            for fmt in _TIME_FORMATS:
                try:
                    clock = datetime.strptime(text.upper(), fmt).time()
                except ValueError:
                    continue
                parsed = datetime.combine(on_date or date(1900, 1, 1), clock)
                break
        if parsed is None:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_calendar_date(value) -> Optional[date]:
    """Truncate an API date/timestamp to its calendar day.

    The literal ``YYYY-MM-DD`` prefix wins over timezone conversion so a
    record dated ``2025-05-01T00:00:00.000Z`` groups under May 1st.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    m = _ISO_DATE.match(text)
    if not m:
        return None
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def format_long_date(value: Optional[date]) -> Optional[str]:
    """``date(2025, 5, 1)`` -> ``"May 1, 2025"``."""
    if value is None:
        return None
    return f"{value:%B} {value.day}, {value.year}"


def format_clock(value: Optional[datetime]) -> Optional[str]:
    """``hh:mm AM/PM`` rendering of a punch timestamp."""
    if value is None:
        return None
    return value.strftime("%I:%M %p")


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (date(year, month + 1, 1) - date(year, month, 1)).days


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()

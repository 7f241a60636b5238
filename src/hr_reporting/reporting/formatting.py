"""Field formatting shared by the on-screen table, search and exports.

The same ``display`` rules render cells everywhere, so an exported sheet
reads exactly like the table the user filtered.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Callable

from ..common.datetime_utils import format_clock, format_long_date
from ..core.constants import EMPTY_CELL, NOT_AVAILABLE


def field_value(record: Any, key: str) -> Any:
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def display(value: Any, *, sentinel: str = EMPTY_CELL) -> str:
    if value is None:
        return sentinel
    if isinstance(value, Enum):
        return str(value.value) or sentinel
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, datetime):
        return format_clock(value)
    if isinstance(value, date):
        return format_long_date(value)
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(display(v) for v in value) or sentinel
    text = str(value).strip()
    return text or sentinel


def search_text(value: Any) -> str:
    """Lower-cased text a search term is matched against (``""`` when absent)."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return f"{value.isoformat()} {format_clock(value)}".lower()
    if isinstance(value, date):
        return f"{value.isoformat()} {format_long_date(value)}".lower()
    if isinstance(value, Enum):
        return str(value.value).lower()
    if isinstance(value, (list, tuple)):
        return " ".join(search_text(v) for v in value)
    return str(value).lower()


def sort_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value).lower()
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, float):
        return format_number(value)
    return str(value).lower()


def na(value: Any) -> str:
    return display(value, sentinel=NOT_AVAILABLE)


Formatter = Callable[[Any], str]

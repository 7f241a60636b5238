from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import LeaveStatus
from .model import LeaveBalance, LeaveRecord


def parse_rate(rate: Optional[str]) -> float:
    """``"82%"`` -> 82.0 for chart rendering; absent or malformed -> 0."""
    if rate is None:
        return 0.0
    text = str(rate).strip().rstrip("%").strip()
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if value != value:  # NaN
        return 0.0
    return value


def leave_days_by_type(
    leaves: Iterable[LeaveRecord],
    *,
    status: Optional[LeaveStatus] = LeaveStatus.APPROVED,
) -> dict[str, float]:
    """Sum ``number_of_days`` per leave type label, half days included."""
    totals: dict[str, float] = {}
    for leave in leaves:
        if status is not None and leave.status != status:
            continue
        key = leave.leave_type.value if leave.leave_type else "Other"
        totals[key] = totals.get(key, 0.0) + leave.number_of_days
    return totals


def total_leave_days(leaves: Iterable[LeaveRecord], *, status: Optional[LeaveStatus] = LeaveStatus.APPROVED) -> float:
    return sum(leave_days_by_type(leaves, status=status).values())


def comp_off_used(balance: Optional[LeaveBalance]) -> float:
    if balance is None:
        return 0
    entry = balance.entry("CompOff")
    return entry.used if entry else 0

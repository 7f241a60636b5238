from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import NOT_AVAILABLE, ZERO_PERCENT
from ..core.enums import AttendanceStatus, DayCode


@dataclass(frozen=True)
class AttendanceRecord:
    """Canonical attendance row for one employee and one calendar day.

    ``hours_worked`` and ``day_type`` are filled in by the metrics step;
    straight out of the normalizer they hold their sentinels.
    """

    employee_id: str
    date: Optional[date]
    punch_in: Optional[datetime] = None
    punch_out: Optional[datetime] = None
    project_name: Optional[str] = None
    designation: Optional[str] = None
    full_name: Optional[str] = None
    status: AttendanceStatus = AttendanceStatus.UNMARKED
    is_late: bool = False
    remarks: Optional[str] = None
    record_id: Optional[str] = None
    hours_worked: str = NOT_AVAILABLE
    day_type: str = "Regular"


@dataclass(frozen=True)
class MonthlyAttendanceRow:
    """Read-model for the overall monthly grid (one row per employee)."""

    employee_id: str
    full_name: Optional[str]
    days: tuple[tuple[date, DayCode], ...]
    present: int
    absent: int
    holidays: int
    comp_off_worked: int
    cf_remaining: int
    el: int
    sl: int
    cl: int
    comp_off_used: float
    payable_days: float


@dataclass(frozen=True)
class MonthlySummary:
    employee_id: str
    total_days: float = 0
    present_days: float = 0
    half_days: float = 0
    partially_absent_days: float = 0
    week_offs: float = 0
    holidays: float = 0
    el: float = 0
    sl: float = 0
    cl: float = 0
    comp_off: float = 0
    lop: float = 0


@dataclass(frozen=True)
class PunctualityStats:
    employee_id: str
    attendance_rate: str = ZERO_PERCENT
    late_arrivals: float = 0
    early_arrivals: float = 0
    early_leaves: float = 0

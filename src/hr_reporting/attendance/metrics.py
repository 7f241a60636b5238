from __future__ import annotations

import dataclasses
from datetime import date
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import days_in_month, parse_timestamp
from ..core.constants import FULL_DAY_HOURS, HALF_DAY_HOURS, NOT_AVAILABLE
from ..core.enums import AttendanceStatus, DayCode, LeaveStatus, LeaveType
from ..leave.model import LeaveRecord
from .calendar import is_holiday
from .model import AttendanceRecord, MonthlyAttendanceRow

_LEAVE_CODES = {
    LeaveType.EL: DayCode.EL,
    LeaveType.SL: DayCode.SL,
    LeaveType.CL: DayCode.CL,
    LeaveType.COMP_OFF: DayCode.COMP_OFF,
    LeaveType.OTHER: DayCode.OTHER_LEAVE,
}


def hours_worked(punch_in, punch_out) -> str:
    """Hours between two punches as a 2-decimal string.

    Missing, unparseable or inverted punches give ``"N/A"``.
    """
    start = parse_timestamp(punch_in)
    end = parse_timestamp(punch_out)
    if start is None or end is None or end < start:
        return NOT_AVAILABLE
    return f"{(end - start).total_seconds() / 3600:.2f}"


def classify_day(is_late: bool) -> str:
    return "Late" if is_late else "Regular"


def status_for_hours(hours: Union[float, str]) -> AttendanceStatus:
    try:
        value = float(hours)
    except (TypeError, ValueError):
        return AttendanceStatus.ABSENT
    if value >= FULL_DAY_HOURS:
        return AttendanceStatus.PRESENT
    if value >= HALF_DAY_HOURS:
        return AttendanceStatus.HALF_DAY
    return AttendanceStatus.ABSENT


def format_hours_hm(hours: str) -> str:
    """``"8.50"`` -> ``"8h 30m"``."""
    try:
        value = float(hours)
    except (TypeError, ValueError):
        return NOT_AVAILABLE
    if value <= 0:
        return NOT_AVAILABLE
    whole = int(value)
    minutes = round((value - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return f"{whole}h {minutes}m"


def apply_metrics(records: Iterable[AttendanceRecord]) -> tuple[AttendanceRecord, ...]:
    return tuple(
        dataclasses.replace(
            r,
            hours_worked=hours_worked(r.punch_in, r.punch_out),
            day_type=classify_day(r.is_late),
        )
        for r in records
    )


def day_code(
    day: date,
    *,
    today: date,
    record: Optional[AttendanceRecord],
    leaves: Sequence[LeaveRecord],
) -> DayCode:
    if day > today:
        return DayCode.FUTURE

    for leave in leaves:
        if leave.status != LeaveStatus.APPROVED or not leave.start_date or not leave.end_date:
            continue
        if leave.start_date <= day <= leave.end_date:
            return _LEAVE_CODES.get(leave.leave_type, DayCode.OTHER_LEAVE)

    punch_in = record.punch_in if record else None
    punch_out = record.punch_out if record else None

    if is_holiday(day):
        return DayCode.COMP_OFF_WORKED if punch_in and punch_out else DayCode.HOLIDAY

    present = record is not None and record.status == AttendanceStatus.PRESENT
    if present and punch_in and (punch_out or day == today):
        return DayCode.PRESENT
    return DayCode.ABSENT


def build_monthly_row(
    *,
    employee_id: str,
    full_name: Optional[str],
    records: Sequence[AttendanceRecord],
    leaves: Sequence[LeaveRecord],
    year: int,
    month: int,
    today: date,
    comp_off_used: float = 0,
) -> MonthlyAttendanceRow:
    """Day codes, counts and payable days for one employee-month.

    Payable = P + H + EL + SL + CL + min(A, CF) + CompOff used; CF days beyond
    the absences they offset are reported as ``cf_remaining``.
    """
    by_day: dict[date, AttendanceRecord] = {}
    for r in records:
        if r.employee_id == employee_id and r.date and r.date not in by_day:
            by_day[r.date] = r

    days = []
    for n in range(1, days_in_month(year, month) + 1):
        d = date(year, month, n)
        days.append((d, day_code(d, today=today, record=by_day.get(d), leaves=leaves)))

    counts: dict[DayCode, int] = {}
    for _, code in days:
        counts[code] = counts.get(code, 0) + 1

    present = counts.get(DayCode.PRESENT, 0)
    absent = counts.get(DayCode.ABSENT, 0)
    holidays = counts.get(DayCode.HOLIDAY, 0)
    cf = counts.get(DayCode.COMP_OFF_WORKED, 0)
    el = counts.get(DayCode.EL, 0)
    sl = counts.get(DayCode.SL, 0)
    cl = counts.get(DayCode.CL, 0)
    cf_matched = min(absent, cf)
    comp_off_used = comp_off_used if comp_off_used > 0 else 0

    return MonthlyAttendanceRow(
        employee_id=employee_id,
        full_name=full_name,
        days=tuple(days),
        present=present,
        absent=absent,
        holidays=holidays,
        comp_off_worked=cf,
        cf_remaining=cf - cf_matched,
        el=el,
        sl=sl,
        cl=cl,
        comp_off_used=comp_off_used,
        payable_days=present + holidays + el + sl + cl + cf_matched + comp_off_used,
    )

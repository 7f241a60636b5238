from __future__ import annotations

from datetime import date, datetime

from hr_reporting.attendance.calendar import is_holiday, is_second_or_fourth_saturday
from hr_reporting.attendance.metrics import build_monthly_row, day_code
from hr_reporting.attendance.model import AttendanceRecord
from hr_reporting.core.enums import AttendanceStatus, DayCode, LeaveStatus, LeaveType
from hr_reporting.leave.model import LeaveRecord


def _present(day: date, *, punch_out=True) -> AttendanceRecord:
    return AttendanceRecord(
        employee_id="EMP001",
        date=day,
        punch_in=datetime.combine(day, datetime.min.time()).replace(hour=9),
        punch_out=datetime.combine(day, datetime.min.time()).replace(hour=17) if punch_out else None,
        status=AttendanceStatus.PRESENT,
    )


def _leave(start: date, end: date, leave_type=LeaveType.EL, status=LeaveStatus.APPROVED) -> LeaveRecord:
    return LeaveRecord(
        leave_id=f"L-{start}",
        employee_id="EMP001",
        leave_type=leave_type,
        leave_type_label=leave_type.value,
        start_date=start,
        end_date=end,
        number_of_days=(end - start).days + 1,
        status=status,
    )


def test_holiday_calendar():
    assert is_holiday(date(2025, 5, 4))  # Sunday
    assert is_second_or_fourth_saturday(date(2025, 5, 10))
    assert not is_second_or_fourth_saturday(date(2025, 5, 3))
    assert is_holiday(date(2025, 5, 1))  # listed
    assert not is_holiday(date(2025, 5, 2))


def test_day_codes():
    today = date(2025, 5, 20)
    assert day_code(date(2025, 5, 21), today=today, record=None, leaves=()) is DayCode.FUTURE
    assert day_code(date(2025, 5, 2), today=today, record=_present(date(2025, 5, 2)), leaves=()) is DayCode.PRESENT
    assert day_code(date(2025, 5, 2), today=today, record=None, leaves=()) is DayCode.ABSENT
    assert day_code(date(2025, 5, 4), today=today, record=None, leaves=()) is DayCode.HOLIDAY
    assert day_code(date(2025, 5, 4), today=today, record=_present(date(2025, 5, 4)), leaves=()) is DayCode.COMP_OFF_WORKED
    # missing punch-out only counts as present on the current day
    assert day_code(date(2025, 5, 19), today=today, record=_present(date(2025, 5, 19), punch_out=False), leaves=()) is DayCode.ABSENT
    assert day_code(today, today=today, record=_present(today, punch_out=False), leaves=()) is DayCode.PRESENT


def test_leave_overrides_attendance_only_when_approved():
    today = date(2025, 5, 20)
    day = date(2025, 5, 6)
    approved = [_leave(day, day, LeaveType.SL)]
    pending = [_leave(day, day, LeaveType.SL, LeaveStatus.PENDING)]
    assert day_code(day, today=today, record=None, leaves=approved) is DayCode.SL
    assert day_code(day, today=today, record=None, leaves=pending) is DayCode.ABSENT


def test_monthly_row_payable_days():
    today = date(2025, 5, 20)
    records = [_present(date(2025, 5, 2)), _present(date(2025, 5, 5)), _present(date(2025, 5, 4))]
    leaves = [_leave(date(2025, 5, 6), date(2025, 5, 7))]
    row = build_monthly_row(
        employee_id="EMP001",
        full_name="Asha Rao",
        records=records,
        leaves=leaves,
        year=2025,
        month=5,
        today=today,
        comp_off_used=1,
    )
    assert len(row.days) == 31
    assert row.present == 2
    assert row.el == 2
    assert row.comp_off_worked == 1
    # May 1-20: holidays are 1 (listed), 4, 10, 11, 18; 4th is CF instead of H
    assert row.holidays == 4
    assert row.absent == 20 - row.present - row.el - row.holidays - row.comp_off_worked
    assert row.cf_remaining == 0
    assert row.payable_days == 2 + 4 + 2 + 1 + 1
    assert dict(row.days)[date(2025, 5, 25)] is DayCode.FUTURE

from __future__ import annotations

from functools import partial
from typing import Any, Optional

from ..common.datetime_utils import parse_calendar_date
from ..common.result import NormalizeResult, clean_str, normalize_collection, to_number
from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveBalance, LeaveBalanceEntry, LeaveRecord

LEAVE_HISTORY_ROOT = "leaveHistory"


def _days(raw: dict, start, end, is_half_day: bool) -> float:
    days = to_number(raw.get("numberOfDays"), default=0)
    if days > 0:
        return days
    if is_half_day:
        return 0.5
    if start and end and end >= start:
        return float((end - start).days + 1)
    return 0.0


def to_leave(raw: dict, *, employee_id: Optional[str] = None) -> Optional[LeaveRecord]:
    leave_id = clean_str(raw.get("leaveId") or raw.get("_id"))
    emp_id = clean_str(raw.get("employeeId")) or employee_id
    if not leave_id or not emp_id:
        return None
    start = parse_calendar_date(raw.get("startDate"))
    end = parse_calendar_date(raw.get("endDate"))
    is_half_day = bool(raw.get("isHalfDay"))
    return LeaveRecord(
        leave_id=leave_id,
        employee_id=emp_id,
        leave_type=LeaveType.parse(raw.get("leaveType")),
        leave_type_label=clean_str(raw.get("leaveType")),
        start_date=start,
        end_date=end,
        number_of_days=_days(raw, start, end, is_half_day),
        status=LeaveStatus.parse(raw.get("status")),
        reason=clean_str(raw.get("reason")),
        is_half_day=is_half_day,
        applied_on=parse_calendar_date(raw.get("appliedOn")),
        full_name=clean_str(raw.get("employeeName") or raw.get("fullName")),
        designation=clean_str(raw.get("designation")),
    )


def normalize_leave_history(payload: Any, employee_id: Optional[str] = None) -> NormalizeResult:
    """Leave history for one employee; items inherit the payload's employeeId."""
    if employee_id is None and isinstance(payload, dict):
        employee_id = clean_str(payload.get("employeeId"))
    return normalize_collection(payload, LEAVE_HISTORY_ROOT, partial(to_leave, employee_id=employee_id))


def normalize_leave_balance(payload: Any, employee_id: str) -> LeaveBalance:
    if not isinstance(payload, dict):
        return LeaveBalance(employee_id=employee_id)

    balances = payload.get("balances")
    entries = []
    if isinstance(balances, dict):
        for leave_type, values in balances.items():
            if not isinstance(values, dict):
                values = {}
            entries.append(
                LeaveBalanceEntry(
                    leave_type=str(leave_type),
                    allocated=to_number(values.get("allocated")),
                    used=to_number(values.get("used")),
                    remaining=to_number(values.get("remaining")),
                    pending=to_number(values.get("pending")),
                )
            )

    return LeaveBalance(
        employee_id=employee_id,
        entries=tuple(entries),
        total_allocated=to_number(payload.get("totalAllocated")),
        total_used=to_number(payload.get("totalUsed")),
        total_remaining=to_number(payload.get("totalRemaining")),
        total_pending=to_number(payload.get("totalPending")),
    )

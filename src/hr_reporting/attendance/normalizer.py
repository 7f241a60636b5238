from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import parse_calendar_date, parse_timestamp
from ..common.result import NormalizeResult, clean_str, normalize_collection, resolve_root, to_number
from ..core.constants import ZERO_PERCENT
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, MonthlySummary, PunctualityStats

ATTENDANCE_ROOT = "attendance"


def _record_id(raw: dict) -> Optional[str]:
    rid = raw.get("_id")
    if isinstance(rid, dict):
        # grouped rows are keyed by {employeeId, date}
        parts = [clean_str(rid.get("employeeId")), clean_str(rid.get("date"))]
        return ":".join(p for p in parts if p) or None
    return clean_str(rid)


def to_attendance(raw: dict) -> Optional[AttendanceRecord]:
    employee_id = clean_str(raw.get("employeeId"))
    if not employee_id:
        return None
    day = parse_calendar_date(raw.get("date"))
    return AttendanceRecord(
        employee_id=employee_id,
        date=day,
        punch_in=parse_timestamp(raw.get("punchInTime"), on_date=day),
        punch_out=parse_timestamp(raw.get("punchOutTime"), on_date=day),
        project_name=clean_str(raw.get("projectName")),
        designation=clean_str(raw.get("designation")),
        full_name=clean_str(raw.get("fullName") or raw.get("name")),
        status=AttendanceStatus.parse(raw.get("status")) or AttendanceStatus.UNMARKED,
        is_late=bool(raw.get("isLate")),
        remarks=clean_str(raw.get("remarks")),
        record_id=_record_id(raw),
    )


def normalize_attendance(payload: Any, root_key: str = ATTENDANCE_ROOT) -> NormalizeResult:
    return normalize_collection(payload, root_key, to_attendance)


def normalize_monthly_summary(payload: Any, employee_id: str) -> MonthlySummary:
    summary = resolve_root(payload, "data.summary")
    if not isinstance(summary, dict):
        summary = {}
    return MonthlySummary(
        employee_id=employee_id,
        total_days=to_number(summary.get("totalDays")),
        present_days=to_number(summary.get("presentDays")),
        half_days=to_number(summary.get("halfDays")),
        partially_absent_days=to_number(summary.get("partiallyAbsentDays")),
        week_offs=to_number(summary.get("weekOffs")),
        holidays=to_number(summary.get("holidays")),
        el=to_number(summary.get("el")),
        sl=to_number(summary.get("sl")),
        cl=to_number(summary.get("cl")),
        comp_off=to_number(summary.get("compOff")),
        lop=to_number(summary.get("lop")),
    )


def normalize_monthly_stats(payload: Any, employee_id: str) -> PunctualityStats:
    data = resolve_root(payload, "data")
    if not isinstance(data, dict):
        data = {}
    issues = data.get("punctualityIssues")
    if not isinstance(issues, dict):
        issues = {}
    rate = data.get("attendanceRate")
    return PunctualityStats(
        employee_id=employee_id,
        attendance_rate=str(rate) if rate not in (None, "") else ZERO_PERCENT,
        late_arrivals=to_number(issues.get("lateArrivals")),
        early_arrivals=to_number(issues.get("earlyArrivals")),
        early_leaves=to_number(issues.get("earlyLeaves")),
    )

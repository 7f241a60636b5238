from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import parse_calendar_date, parse_timestamp
from ..common.result import NormalizeResult, clean_str, normalize_collection
from ..core.enums import LeaveStatus
from .model import RegularizationRecord

REGULARIZATIONS_ROOT = "data.regularizations"


def to_regularization(raw: dict) -> Optional[RegularizationRecord]:
    record_id = clean_str(raw.get("_id"))
    employee_id = clean_str(raw.get("employeeId"))
    if not record_id or not employee_id:
        return None
    day = parse_calendar_date(raw.get("date"))
    return RegularizationRecord(
        record_id=record_id,
        employee_id=employee_id,
        date=day,
        status=clean_str(raw.get("status")),
        regularization_status=LeaveStatus.parse(raw.get("regularizationStatus")),
        punch_in=parse_timestamp(raw.get("punchInTime"), on_date=day),
        punch_out=parse_timestamp(raw.get("punchOutTime"), on_date=day),
        reason=clean_str(raw.get("regularizationReason")),
        regularized_by=clean_str(raw.get("regularizedBy")),
        original_status=clean_str(raw.get("originalStatus")),
        remarks=clean_str(raw.get("remarks")),
    )


def normalize_regularizations(payload: Any) -> NormalizeResult:
    return normalize_collection(payload, REGULARIZATIONS_ROOT, to_regularization)

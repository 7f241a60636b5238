from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import parse_calendar_date
from ..common.result import NormalizeResult, clean_str, normalize_collection
from ..core.enums import IssueStatus
from .model import IdCardRecord

ID_CARDS_ROOT = "allIdCards"


def to_id_card(raw: dict) -> Optional[IdCardRecord]:
    employee_id = clean_str(raw.get("employeeId"))
    if not employee_id:
        return None
    return IdCardRecord(
        employee_id=employee_id,
        status=IssueStatus.parse(raw.get("status")),
        full_name=clean_str(raw.get("fullName")),
        project_name=clean_str(raw.get("projectName")),
        designation=clean_str(raw.get("designation")),
        blood_group=clean_str(raw.get("bloodGroup")),
        valid_until=parse_calendar_date(raw.get("validUntil")),
        issued_date=parse_calendar_date(raw.get("issuedDate")),
        request_date=parse_calendar_date(raw.get("requestDate")),
        approved_by=clean_str(raw.get("approvedBy")),
        record_id=clean_str(raw.get("_id")),
    )


def normalize_id_cards(payload: Any, root_key: str = ID_CARDS_ROOT) -> NormalizeResult:
    return normalize_collection(payload, root_key, to_id_card)

from __future__ import annotations

from typing import Any, Optional

from ..common.result import NormalizeResult, clean_str, normalize_collection
from ..core.enums import IssueStatus
from .model import Employee

KYC_ROOT = "kycForms"


def to_employee(raw: dict) -> Optional[Employee]:
    details = raw.get("personalDetails")
    if not isinstance(details, dict):
        details = {}
    employee_id = clean_str(details.get("employeeId") or raw.get("employeeId"))
    if not employee_id:
        return None
    return Employee(
        employee_id=employee_id,
        full_name=clean_str(details.get("fullName")),
        designation=clean_str(details.get("designation")),
        project_name=clean_str(details.get("projectName")),
        image_url=clean_str(details.get("employeeImage")),
        record_id=clean_str(raw.get("_id")),
        status=IssueStatus.parse(raw.get("status")),
    )


def normalize_kyc_forms(payload: Any) -> NormalizeResult:
    return normalize_collection(payload, KYC_ROOT, to_employee)

from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import parse_calendar_date
from ..common.result import EmptyRoot, NormalizeResult, clean_str, normalize_collection
from ..core.enums import IssueStatus
from .model import UniformRequest

UNIFORMS_ROOT = "uniforms"


def _items(raw: dict) -> tuple[str, ...]:
    value = raw.get("uniformType", raw.get("items"))
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return ()
    out = []
    for v in value:
        if isinstance(v, dict):
            v = v.get("name") or v.get("type")
        text = clean_str(v)
        if text:
            out.append(text)
    return tuple(out)


def to_uniform(raw: dict) -> Optional[UniformRequest]:
    employee_id = clean_str(raw.get("employeeId"))
    if not employee_id:
        return None
    return UniformRequest(
        employee_id=employee_id,
        status=IssueStatus.parse(raw.get("issuedStatus") or raw.get("status")),
        items=_items(raw),
        full_name=clean_str(raw.get("fullName")),
        project_name=clean_str(raw.get("projectName")),
        designation=clean_str(raw.get("designation")),
        requested_on=parse_calendar_date(raw.get("requestDate") or raw.get("createdAt")),
        record_id=clean_str(raw.get("_id")),
    )


def normalize_uniforms(payload: Any) -> NormalizeResult:
    # the endpoint signals failure with success=false instead of an HTTP status
    if isinstance(payload, dict) and payload.get("success") is False:
        return EmptyRoot(root_key=UNIFORMS_ROOT)
    return normalize_collection(payload, UNIFORMS_ROOT, to_uniform)

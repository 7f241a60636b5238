from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import IssueStatus


@dataclass(frozen=True)
class IdCardRecord:
    employee_id: str
    status: Optional[IssueStatus]
    full_name: Optional[str] = None
    project_name: Optional[str] = None
    designation: Optional[str] = None
    blood_group: Optional[str] = None
    valid_until: Optional[date] = None
    issued_date: Optional[date] = None
    request_date: Optional[date] = None
    approved_by: Optional[str] = None
    record_id: Optional[str] = None

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import IssueStatus


@dataclass(frozen=True)
class Employee:
    """Canonical employee, taken from a KYC form's ``personalDetails``."""

    employee_id: str
    full_name: Optional[str] = None
    designation: Optional[str] = None
    project_name: Optional[str] = None
    image_url: Optional[str] = None
    record_id: Optional[str] = None
    status: Optional[IssueStatus] = None

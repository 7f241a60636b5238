from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import IssueStatus


@dataclass(frozen=True)
class UniformRequest:
    employee_id: str
    status: Optional[IssueStatus]
    items: tuple[str, ...] = ()
    full_name: Optional[str] = None
    project_name: Optional[str] = None
    designation: Optional[str] = None
    requested_on: Optional[date] = None
    record_id: Optional[str] = None

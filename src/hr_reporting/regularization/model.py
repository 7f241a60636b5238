from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class RegularizationRecord:
    """A request to correct one attendance day; decided like a leave request."""

    record_id: str
    employee_id: str
    date: Optional[date]
    status: Optional[str] = None
    regularization_status: Optional[LeaveStatus] = None
    punch_in: Optional[datetime] = None
    punch_out: Optional[datetime] = None
    reason: Optional[str] = None
    regularized_by: Optional[str] = None
    original_status: Optional[str] = None
    remarks: Optional[str] = None

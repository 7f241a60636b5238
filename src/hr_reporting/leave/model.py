from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRecord:
    leave_id: str
    employee_id: str
    leave_type: Optional[LeaveType]
    leave_type_label: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    number_of_days: float
    status: Optional[LeaveStatus]
    reason: Optional[str] = None
    is_half_day: bool = False
    applied_on: Optional[date] = None
    full_name: Optional[str] = None
    project_name: Optional[str] = None
    designation: Optional[str] = None


@dataclass(frozen=True)
class LeaveBalanceEntry:
    leave_type: str
    allocated: float = 0
    used: float = 0
    remaining: float = 0
    pending: float = 0

    @property
    def is_consistent(self) -> bool:
        """Whether the API's ``remaining`` agrees with allocated - used - pending.

        Diagnostic only: ``remaining`` is always shown as supplied.
        """
        return abs(self.allocated - self.used - self.pending - self.remaining) < 1e-9


@dataclass(frozen=True)
class LeaveBalance:
    employee_id: str
    entries: tuple[LeaveBalanceEntry, ...] = ()
    total_allocated: float = 0
    total_used: float = 0
    total_remaining: float = 0
    total_pending: float = 0

    def entry(self, leave_type: str) -> Optional[LeaveBalanceEntry]:
        for e in self.entries:
            if e.leave_type == leave_type:
                return e
        return None

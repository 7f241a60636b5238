from __future__ import annotations

from enum import Enum
from typing import Optional


class _LabelEnum(str, Enum):
    """Enum parsed leniently from the loosely-typed labels the HR API returns."""

    @classmethod
    def aliases(cls) -> dict[str, str]:
        return {}

    @classmethod
    def parse(cls, raw) -> Optional["_LabelEnum"]:
        if raw is None:
            return None
        key = str(raw).strip().lower().replace("_", " ").replace("-", " ")
        if not key:
            return None
        key = cls.aliases().get(key, key)
        for member in cls:
            if member.value.lower() == key or member.name.lower().replace("_", " ") == key:
                return member
        return None


class Role(str, Enum):
    """Roles that own a page controller set."""

    MANAGER = "manager"
    MANAGER_OPS = "manager-ops"
    COORDINATOR = "coordinator"
    HRD = "hrd"
    EMPLOYEE = "employee"


class AttendanceStatus(_LabelEnum):
    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    ON_LEAVE = "On Leave"
    UNMARKED = "Unmarked"

    @classmethod
    def aliases(cls) -> dict[str, str]:
        return {"halfday": "half day", "leave": "on leave", "onleave": "on leave"}


class LeaveStatus(_LabelEnum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveType(_LabelEnum):
    EL = "EL"
    SL = "SL"
    CL = "CL"
    COMP_OFF = "CompOff"
    OTHER = "Other"

    @classmethod
    def aliases(cls) -> dict[str, str]:
        return {"comp off": "compoff", "compensatory off": "compoff"}

    @classmethod
    def parse(cls, raw) -> Optional["LeaveType"]:
        if raw is None or not str(raw).strip():
            return None
        return super().parse(raw) or cls.OTHER


class IssueStatus(_LabelEnum):
    """Status of uniform requests, ID cards and KYC forms."""

    PENDING = "Pending"
    APPROVED = "Approved"
    ISSUED = "Issued"
    REJECTED = "Rejected"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class DayCode(str, Enum):
    """Per-day code used by the monthly attendance grid."""

    PRESENT = "P"
    ABSENT = "A"
    HOLIDAY = "H"
    COMP_OFF_WORKED = "CF"
    EL = "EL"
    SL = "SL"
    CL = "CL"
    COMP_OFF = "CompOff"
    OTHER_LEAVE = "L"
    FUTURE = ""


class Action(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"

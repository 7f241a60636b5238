"""Composite reports: the overall monthly grid and the per-employee summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..api.client import HRApiClient
from ..attendance.metrics import apply_metrics
from ..attendance.model import AttendanceRecord, MonthlyAttendanceRow, MonthlySummary, PunctualityStats
from ..attendance.normalizer import normalize_attendance, normalize_monthly_stats, normalize_monthly_summary
from ..employees.model import Employee
from ..leave.metrics import leave_days_by_type, parse_rate, total_leave_days
from ..leave.model import LeaveBalance, LeaveRecord
from ..leave.normalizer import normalize_leave_balance
from .definitions import ATTENDANCE, LEAVE_BALANCE_HEADERS, LEAVE_HISTORY_HEADERS
from .exporters import TableSection, section_for
from .formatting import display, format_number
from .sources import employee_leaves

OVERALL_TITLE = "Overall Attendance"
OVERALL_EXCEL_FILENAME = "Overall_Attendance_Report.xlsx"
OVERALL_PDF_FILENAME = "Overall_Attendance_Report.pdf"
SUMMARY_EXCEL_FILENAME = "Employee_Summary.xlsx"
SUMMARY_PDF_FILENAME = "Employee_Summary.pdf"

_GRID_TOTALS = ("P", "A", "H", "CF", "EL", "SL", "CL", "CompOff Used", "Payable Days")


def monthly_grid_section(rows: Sequence[MonthlyAttendanceRow]) -> TableSection:
    day_headers: tuple[str, ...] = ()
    if rows:
        day_headers = tuple(str(d.day) for d, _ in rows[0].days)
    headers = ("Employee ID", "Name", *day_headers, *_GRID_TOTALS)
    body = []
    for row in rows:
        body.append((
            row.employee_id,
            display(row.full_name),
            *(code.value for _, code in row.days),
            str(row.present),
            str(row.absent),
            str(row.holidays),
            str(row.comp_off_worked),
            str(row.el),
            str(row.sl),
            str(row.cl),
            format_number(row.comp_off_used),
            format_number(row.payable_days),
        ))
    return TableSection(title=OVERALL_TITLE, headers=headers, rows=tuple(body))


@dataclass(frozen=True)
class EmployeeSummary:
    employee: Employee
    attendance: tuple[AttendanceRecord, ...]
    balance: LeaveBalance
    leaves: tuple[LeaveRecord, ...]


def load_employee_summary(api: HRApiClient, employee: Employee, *, year: int, month: int) -> EmployeeSummary:
    payload = api.get_employee_monthly_attendance(employee.employee_id, month=month, year=year)
    attendance = apply_metrics(normalize_attendance(payload).records)
    balance = normalize_leave_balance(api.get_leave_balance(employee.employee_id), employee.employee_id)
    return EmployeeSummary(
        employee=employee,
        attendance=attendance,
        balance=balance,
        leaves=employee_leaves(api, employee),
    )


def leave_totals(summary: EmployeeSummary) -> dict:
    """Approved leave days per type and overall, half days included."""
    return {
        "by_type": leave_days_by_type(summary.leaves),
        "total": total_leave_days(summary.leaves),
    }


@dataclass(frozen=True)
class MonthlyStats:
    summary: MonthlySummary
    punctuality: PunctualityStats

    @property
    def rate_value(self) -> float:
        return parse_rate(self.punctuality.attendance_rate)


def load_monthly_stats(api: HRApiClient, employee_id: str, *, year: int, month: int) -> MonthlyStats:
    return MonthlyStats(
        summary=normalize_monthly_summary(
            api.get_monthly_summary(employee_id, month=month, year=year), employee_id
        ),
        punctuality=normalize_monthly_stats(
            api.get_monthly_stats(employee_id, month=month, year=year), employee_id
        ),
    )


def balance_section(balance: LeaveBalance) -> TableSection:
    rows = [
        (e.leave_type, format_number(e.allocated), format_number(e.used), format_number(e.remaining),
         format_number(e.pending))
        for e in balance.entries
    ]
    rows.append((
        "Total",
        format_number(balance.total_allocated),
        format_number(balance.total_used),
        format_number(balance.total_remaining),
        format_number(balance.total_pending),
    ))
    return TableSection(title="Leave Balance", headers=tuple(LEAVE_BALANCE_HEADERS), rows=tuple(rows))


def history_section(leaves: Sequence[LeaveRecord]) -> TableSection:
    rows = tuple(
        (
            display(leave.leave_type_label),
            display(leave.start_date),
            display(leave.end_date),
            format_number(leave.number_of_days),
            display(leave.status),
            display(leave.reason),
        )
        for leave in leaves
    )
    return TableSection(title="Leave History", headers=tuple(LEAVE_HISTORY_HEADERS), rows=rows)


def summary_sections(summary: EmployeeSummary, *, include_history: bool) -> list[TableSection]:
    """Attendance and leave balance; the PDF also appends the leave history."""
    sections = [section_for(ATTENDANCE, summary.attendance), balance_section(summary.balance)]
    if include_history:
        sections.append(history_section(summary.leaves))
    return sections


def summary_title(employee: Employee, *, year: Optional[int] = None, month: Optional[int] = None) -> str:
    name = display(employee.full_name, sentinel=employee.employee_id)
    if year and month:
        return f"Employee Summary: {name} ({employee.employee_id}) {month:02d}/{year}"
    return f"Employee Summary: {name} ({employee.employee_id})"

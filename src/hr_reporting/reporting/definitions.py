from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..attendance.metrics import format_hours_hm, status_for_hours
from ..core.constants import NOT_AVAILABLE
from ..core.exceptions import UnknownReportError
from .formatting import Formatter, display, field_value, na


def hours_status(hours: Any) -> str:
    if hours in (None, NOT_AVAILABLE):
        return NOT_AVAILABLE
    return status_for_hours(hours).value


@dataclass(frozen=True)
class Column:
    header: str
    key: str
    formatter: Optional[Formatter] = None

    def render(self, record: Any) -> str:
        value = field_value(record, self.key)
        if self.formatter:
            return self.formatter(value)
        return display(value)


@dataclass(frozen=True)
class ReportDefinition:
    """Everything a page needs to know about one tabular report.

    ``project_field``/``designation_field``/``status_field`` name the record
    attribute each dropdown filter compares against; ``None`` means the report
    has no such filter. ``date_field`` drives the date-range filter.
    """

    name: str
    title: str
    sheet_name: str
    excel_filename: str
    pdf_filename: str
    page_size: int
    columns: tuple[Column, ...]
    search_fields: tuple[str, ...]
    sort_fields: tuple[str, ...] = ()
    project_field: Optional[str] = "project_name"
    designation_field: Optional[str] = "designation"
    status_field: Optional[str] = "status"
    date_field: Optional[str] = None
    id_field: str = "employee_id"
    error_message: str = "Failed to load records"
    landscape: bool = False

    @property
    def headers(self) -> list[str]:
        return [c.header for c in self.columns]

    def row(self, record: Any) -> list[str]:
        return [c.render(record) for c in self.columns]


ATTENDANCE = ReportDefinition(
    name="attendance",
    id_field="record_id",
    title="Attendance Report",
    sheet_name="Attendance",
    excel_filename="Attendance_Report.xlsx",
    pdf_filename="Attendance_Report.pdf",
    page_size=12,
    columns=(
        Column("Date", "date", na),
        Column("Employee ID", "employee_id"),
        Column("Name", "full_name"),
        Column("Project", "project_name", na),
        Column("Status", "status"),
        Column("Punch In", "punch_in", na),
        Column("Punch Out", "punch_out", na),
        Column("Hours Worked", "hours_worked", na),
        Column("Duration", "hours_worked", format_hours_hm),
        Column("Hours Status", "hours_worked", hours_status),
        Column("Day Type", "day_type"),
    ),
    search_fields=("employee_id", "full_name", "project_name", "date"),
    sort_fields=("date", "employee_id", "full_name", "project_name", "status", "hours_worked"),
    date_field="date",
    error_message="Failed to fetch attendance data",
    landscape=True,
)

LEAVE = ReportDefinition(
    name="leave",
    id_field="leave_id",
    title="Leave Report",
    sheet_name="Leave Report",
    excel_filename="leave_report.xlsx",
    pdf_filename="leave_report.pdf",
    page_size=15,
    columns=(
        Column("Employee ID", "employee_id"),
        Column("Name", "full_name"),
        Column("Project", "project_name"),
        Column("Designation", "designation"),
        Column("Status", "status"),
        Column("Leave Type", "leave_type_label"),
        Column("Start Date", "start_date"),
        Column("End Date", "end_date"),
        Column("Days", "number_of_days"),
        Column("Applied On", "applied_on"),
    ),
    search_fields=("employee_id", "full_name"),
    sort_fields=("employee_id", "full_name", "project_name", "designation", "status", "leave_type_label", "start_date"),
    date_field="start_date",
    error_message="Failed to load leave records",
    landscape=True,
)

UNIFORM = ReportDefinition(
    name="uniform",
    id_field="record_id",
    title="Uniform Report",
    sheet_name="Uniform Report",
    excel_filename="uniform_report.xlsx",
    pdf_filename="uniform_report.pdf",
    page_size=20,
    columns=(
        Column("Employee ID", "employee_id"),
        Column("Name", "full_name"),
        Column("Project", "project_name"),
        Column("Designation", "designation"),
        Column("Items", "items"),
        Column("Status", "status"),
    ),
    search_fields=("employee_id", "full_name"),
    sort_fields=("employee_id", "full_name", "project_name", "designation", "status"),
    date_field="requested_on",
    error_message="Failed to load uniform records.",
)

ID_CARD = ReportDefinition(
    name="id-card",
    id_field="record_id",
    title="ID Card Report",
    sheet_name="ID Card Report",
    excel_filename="id_card_report.xlsx",
    pdf_filename="id_card_report.pdf",
    page_size=15,
    columns=(
        Column("Employee ID", "employee_id"),
        Column("Name", "full_name"),
        Column("Project", "project_name"),
        Column("Designation", "designation"),
        Column("Status", "status"),
        Column("Valid Until", "valid_until"),
    ),
    search_fields=("employee_id", "full_name"),
    sort_fields=("employee_id", "full_name", "project_name", "designation", "status"),
    date_field="issued_date",
    error_message="Failed to fetch ID Card data.",
)

KYC = ReportDefinition(
    name="kyc",
    title="KYC Requests",
    sheet_name="KYC Requests",
    excel_filename="kyc_report.xlsx",
    pdf_filename="kyc_report.pdf",
    page_size=12,
    columns=(
        Column("Employee ID", "employee_id"),
        Column("Name", "full_name"),
        Column("Project", "project_name"),
        Column("Designation", "designation"),
        Column("Status", "status"),
    ),
    search_fields=("employee_id", "full_name"),
    sort_fields=("employee_id", "full_name", "project_name", "designation", "status"),
    error_message="Failed to fetch KYC requests",
)

EMPLOYEES = ReportDefinition(
    name="employees",
    title="Employee Report",
    sheet_name="Employee Report",
    excel_filename="employee_report.xlsx",
    pdf_filename="employee_report.pdf",
    page_size=5,
    columns=(
        Column("Employee ID", "employee_id"),
        Column("Name", "full_name"),
        Column("Project", "project_name"),
        Column("Designation", "designation"),
    ),
    search_fields=("employee_id", "full_name", "project_name"),
    sort_fields=("employee_id", "full_name", "project_name", "designation"),
    status_field=None,
    error_message="Failed to fetch employees",
)

REGULARIZATION = ReportDefinition(
    name="regularization",
    id_field="record_id",
    title="Attendance Regularizations",
    sheet_name="Regularizations",
    excel_filename="attendance-regularizations.xlsx",
    pdf_filename="attendance-regularizations.pdf",
    page_size=15,
    columns=(
        Column("Date", "date"),
        Column("Employee ID", "employee_id"),
        Column("Status", "status"),
        Column("Reason", "reason"),
        Column("Regularized By", "regularized_by"),
        Column("Regularization Status", "regularization_status"),
        Column("Original Status", "original_status"),
        Column("Remarks", "remarks"),
    ),
    search_fields=("employee_id",),
    sort_fields=("date", "employee_id", "regularization_status"),
    project_field=None,
    designation_field=None,
    status_field="regularization_status",
    date_field="date",
    error_message="Failed to fetch data",
    landscape=True,
)

LEAVE_BALANCE_HEADERS = ["Leave Type", "Allocated", "Used", "Remaining", "Pending"]
LEAVE_HISTORY_HEADERS = ["Leave Type", "Start Date", "End Date", "Days", "Status", "Reason"]

REPORTS: dict[str, ReportDefinition] = {
    d.name: d for d in (ATTENDANCE, LEAVE, UNIFORM, ID_CARD, KYC, EMPLOYEES, REGULARIZATION)
}


def get_report(name: str) -> ReportDefinition:
    try:
        return REPORTS[name]
    except KeyError:
        raise UnknownReportError(f"Unknown report: {name}") from None

"""Data-source adapters: fetch, normalize, scope and enrich one report's records.

Each loader takes the API client and an optional project scope and returns a
``NormalizeResult``. ``FetchError`` from the primary endpoint propagates to the
page controller; per-employee follow-up calls that fail are skipped.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Any, Callable, Iterable, Optional

from ..api.client import HRApiClient
from ..attendance.metrics import apply_metrics, build_monthly_row
from ..attendance.model import MonthlyAttendanceRow
from ..attendance.normalizer import normalize_attendance
from ..common.result import NormalizeResult, Ok
from ..core.exceptions import FetchError
from ..employees.model import Employee
from ..employees.normalizer import normalize_kyc_forms
from ..id_cards.normalizer import normalize_id_cards
from ..leave.metrics import comp_off_used
from ..leave.model import LeaveRecord
from ..leave.normalizer import normalize_leave_balance, normalize_leave_history
from ..regularization.normalizer import normalize_regularizations
from ..uniforms.normalizer import normalize_uniforms

logger = logging.getLogger(__name__)

Loader = Callable[[HRApiClient, Optional[str]], NormalizeResult]


def _replace_records(result: NormalizeResult, records: Iterable[Any]) -> NormalizeResult:
    if isinstance(result, Ok):
        return dataclasses.replace(result, records=tuple(records))
    return result


def in_scope(record: Any, project: Optional[str]) -> bool:
    return project is None or getattr(record, "project_name", None) == project


def scoped(result: NormalizeResult, project: Optional[str]) -> NormalizeResult:
    if project is None:
        return result
    return _replace_records(result, (r for r in result.records if in_scope(r, project)))


def load_directory(api: HRApiClient, project: Optional[str] = None) -> NormalizeResult:
    return scoped(normalize_kyc_forms(api.get_kyc_forms()), project)


def _directory_index(api: HRApiClient, project: Optional[str]) -> dict[str, Employee]:
    return {e.employee_id: e for e in load_directory(api, project).records}


def _enrich(record: Any, employee: Optional[Employee]) -> Any:
    """Fill missing name/project/designation from the employee directory."""
    if employee is None:
        return record
    changes = {}
    for attr in ("full_name", "project_name", "designation"):
        if getattr(record, attr, None) is None and getattr(employee, attr) is not None:
            changes[attr] = getattr(employee, attr)
    return dataclasses.replace(record, **changes) if changes else record


def load_attendance(api: HRApiClient, project: Optional[str] = None) -> NormalizeResult:
    result = normalize_attendance(api.get_all_attendance())
    if not isinstance(result, Ok):
        return result
    directory = _directory_index(api, None)
    records = apply_metrics(_enrich(r, directory.get(r.employee_id)) for r in result.records)
    return scoped(_replace_records(result, records), project)


def employee_leaves(api: HRApiClient, employee: Employee) -> tuple[LeaveRecord, ...]:
    """One employee's leave history; a failed call yields no records."""
    try:
        payload = api.get_leave_history(employee.employee_id)
    except FetchError as e:
        logger.warning("Skipping leave history for %s: %s", employee.employee_id, e.message)
        return ()
    return tuple(
        _enrich(r, employee)
        for r in normalize_leave_history(payload, employee.employee_id).records
    )


def load_leave(api: HRApiClient, project: Optional[str] = None) -> NormalizeResult:
    directory = load_directory(api, project)
    if not isinstance(directory, Ok):
        return directory
    records: list[LeaveRecord] = []
    for employee in directory.records:
        records.extend(employee_leaves(api, employee))
    return Ok(records=tuple(records))


def load_uniforms(api: HRApiClient, project: Optional[str] = None) -> NormalizeResult:
    return scoped(normalize_uniforms(api.get_uniforms()), project)


def load_id_cards(api: HRApiClient, project: Optional[str] = None) -> NormalizeResult:
    return scoped(normalize_id_cards(api.get_id_cards()), project)


def load_regularizations(api: HRApiClient, project: Optional[str] = None) -> NormalizeResult:
    result = normalize_regularizations(api.get_regularizations())
    if project is None or not isinstance(result, Ok):
        return result
    # regularizations carry no project; scope them through the directory
    members = _directory_index(api, project)
    return _replace_records(result, (r for r in result.records if r.employee_id in members))


LOADERS: dict[str, Loader] = {
    "attendance": load_attendance,
    "leave": load_leave,
    "uniform": load_uniforms,
    "id-card": load_id_cards,
    "kyc": load_directory,
    "employees": load_directory,
    "regularization": load_regularizations,
}


def load_monthly_grid(
    api: HRApiClient,
    *,
    year: int,
    month: int,
    today: date,
    project: Optional[str] = None,
) -> list[MonthlyAttendanceRow]:
    """Overall attendance: one grid row per employee in scope."""
    employees = load_directory(api, project).records
    attendance = normalize_attendance(api.get_all_attendance()).records
    rows = []
    for employee in employees:
        try:
            balance = normalize_leave_balance(api.get_leave_balance(employee.employee_id), employee.employee_id)
        except FetchError as e:
            logger.warning("Skipping leave balance for %s: %s", employee.employee_id, e.message)
            balance = None
        rows.append(
            build_monthly_row(
                employee_id=employee.employee_id,
                full_name=employee.full_name,
                records=[r for r in attendance if r.employee_id == employee.employee_id],
                leaves=employee_leaves(api, employee),
                year=year,
                month=month,
                today=today,
                comp_off_used=comp_off_used(balance),
            )
        )
    return rows

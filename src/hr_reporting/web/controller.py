from __future__ import annotations

import dataclasses
import io
from datetime import date
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request, send_file

from ..actions.service import HANDLERS
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive
from ..container import Container
from ..core.enums import Action, SortDirection
from ..core.exceptions import (
    ActionInProgressError,
    AuthorizationError,
    FetchError,
    UnknownReportError,
    ValidationError,
)
from ..employees.model import Employee
from ..reporting.exporters.excel import XLSX_MIMETYPE, build_workbook
from ..reporting.exporters.pdf import PDF_MIMETYPE, build_pdf
from ..reporting.pipeline import FilterState
from ..reporting.sources import load_directory, load_monthly_grid
from ..reporting.summary import (
    OVERALL_EXCEL_FILENAME,
    OVERALL_PDF_FILENAME,
    OVERALL_TITLE,
    SUMMARY_EXCEL_FILENAME,
    SUMMARY_PDF_FILENAME,
    leave_totals,
    load_employee_summary,
    load_monthly_stats,
    monthly_grid_section,
    summary_sections,
    summary_title,
)
from ..roles import OVERALL, SUMMARY, resolve_profile


def _parse_date_arg(name: str) -> Optional[date]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date") from None


def _parse_int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return require_positive(int(raw), name)
    except ValueError:
        raise ValidationError(f"{name} must be a positive number") from None


def _parse_page_arg() -> int:
    """Any integer; the pipeline clamps it to the available pages."""
    raw = (request.args.get("page") or "").strip()
    if not raw:
        return 1
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("page must be a whole number") from None


def filter_state_from_args(sortable: tuple[str, ...]) -> FilterState:
    state = FilterState()
    state = state.with_search(request.args.get("search", ""))
    state = state.with_project(request.args.get("project", ""))
    state = state.with_designation(request.args.get("designation", ""))
    state = state.with_status(request.args.get("status", ""))
    date_from, date_to = _parse_date_arg("from"), _parse_date_arg("to")
    if date_from and date_to and date_to < date_from:
        raise ValidationError("to must not be before from")
    state = state.with_date_range(date_from, date_to)

    sort_key = request.args.get("sort")
    if sort_key:
        if sort_key not in sortable:
            raise ValidationError(f"Cannot sort by {sort_key}")
        state = state.sort_by(sort_key)
        try:
            direction = SortDirection(request.args.get("direction", "asc").lower())
        except ValueError:
            raise ValidationError("direction must be asc or desc") from None
        if direction is not state.sort_direction:
            state = state.sort_by(sort_key)
    return state.with_page(_parse_page_arg())


def _month_args(container: Container) -> tuple[int, int]:
    today = container.context.clock().date()
    month = _parse_int_arg("month", today.month)
    if month > 12:
        raise ValidationError("month must be between 1 and 12")
    return _parse_int_arg("year", today.year), month


def _send(data: bytes, filename: str, mimetype: str):
    return send_file(io.BytesIO(data), download_name=filename, as_attachment=True, mimetype=mimetype)


def register(app: Flask, container: Container) -> None:
    context = container.context

    def with_profile(view):
        @wraps(view)
        def wrapper(role, *args, **kwargs):
            g.profile = resolve_profile(context.profiles, role)
            return view(role, *args, **kwargs)

        return wrapper

    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def handle_authorization(e):
        return jsonify({"success": False, "message": str(e)}), 403

    @app.errorhandler(UnknownReportError)
    def handle_unknown_report(e):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(ActionInProgressError)
    def handle_in_progress(e):
        return jsonify({"success": False, "message": str(e)}), 409

    @app.errorhandler(FetchError)
    def handle_fetch(e):
        return jsonify({"success": False, "message": "Failed to load data from the HR service"}), 502

    def _page(report: str):
        """A controller owned by this request, loaded, plus the request's filter state."""
        g.profile.require_report(report)
        page = container.pages.create(g.profile, report)
        state = filter_state_from_args(page.definition.sort_fields)
        page.refresh()
        return page, state

    @app.route("/<role>/reports/<report>", methods=["GET"], endpoint="report_view")
    @with_profile
    def report_view(role, report):
        page, state = _page(report)
        result = page.view(state)
        definition = page.definition
        return jsonify({
            "success": page.error is None,
            "report": definition.name,
            "title": definition.title,
            "columns": definition.headers,
            "rows": [dict(zip(definition.headers, definition.row(r))) for r in result.page_rows],
            "page": result.current_page,
            "total_pages": result.total_pages,
            "total_count": result.filtered_count,
            "options": page.options(),
            "error": page.error,
            "empty_reason": page.empty_reason,
            "notice": page.notice,
        })

    @app.route("/<role>/reports/<report>/export.xlsx", methods=["GET"], endpoint="report_export_excel")
    @with_profile
    def report_export_excel(role, report):
        page, state = _page(report)
        return _send(page.export_excel(state), page.definition.excel_filename, XLSX_MIMETYPE)

    @app.route("/<role>/reports/<report>/export.pdf", methods=["GET"], endpoint="report_export_pdf")
    @with_profile
    def report_export_pdf(role, report):
        page, state = _page(report)
        return _send(page.export_pdf(state), page.definition.pdf_filename, PDF_MIMETYPE)

    @app.route("/<role>/actions/<report>/<record_id>/<action>", methods=["POST"], endpoint="report_action")
    @with_profile
    def report_action(role, report, record_id, action):
        g.profile.require_report(report)
        g.profile.require_action(report)
        try:
            parsed = Action(action.lower())
        except ValueError:
            raise ValidationError("action must be approve or reject") from None
        handler = HANDLERS.get(report)
        if handler is None:
            raise UnknownReportError(f"No actions for report: {report}")

        data = request.get_json(silent=True) or {}
        page = container.pages.get(g.profile, report)
        if not page.collection:
            page.refresh()
        toast = container.action_service.perform(
            page,
            handler,
            record_id,
            parsed,
            reason=data.get("reason"),
            actor=str(data.get("approvedBy") or role),
        )
        return jsonify({"success": toast.kind == "success", "toast": toast.to_dict()})

    # Overall monthly grid
    def _overall_rows():
        g.profile.require_report(OVERALL)
        year, month = _month_args(container)
        return load_monthly_grid(
            context.api,
            year=year,
            month=month,
            today=context.clock().date(),
            project=g.profile.project,
        )

    @app.route("/<role>/reports/overall", methods=["GET"], endpoint="overall_view")
    @with_profile
    def overall_view(role):
        section = monthly_grid_section(_overall_rows())
        return jsonify({
            "success": True,
            "title": OVERALL_TITLE,
            "columns": list(section.headers),
            "rows": [dict(zip(section.headers, row)) for row in section.rows],
        })

    @app.route("/<role>/reports/overall/export.xlsx", methods=["GET"], endpoint="overall_export_excel")
    @with_profile
    def overall_export_excel(role):
        return _send(build_workbook([monthly_grid_section(_overall_rows())]), OVERALL_EXCEL_FILENAME, XLSX_MIMETYPE)

    @app.route("/<role>/reports/overall/export.pdf", methods=["GET"], endpoint="overall_export_pdf")
    @with_profile
    def overall_export_pdf(role):
        section = monthly_grid_section(_overall_rows())
        return _send(build_pdf(OVERALL_TITLE, [section], wide=True), OVERALL_PDF_FILENAME, PDF_MIMETYPE)

    # Employee summary
    def _summary_employee(employee_id: str) -> Employee:
        g.profile.require_report(SUMMARY)
        if g.profile.own_summary_only and context.current_employee() != employee_id:
            raise AuthorizationError("Employees can only view their own summary")
        for employee in load_directory(context.api, g.profile.project).records:
            if employee.employee_id == employee_id:
                return employee
        if g.profile.project is not None:
            raise AuthorizationError(f"Employee {employee_id} is outside project {g.profile.project}")
        return Employee(employee_id=employee_id)

    @app.route("/<role>/summary/<employee_id>", methods=["GET"], endpoint="summary_view")
    @with_profile
    def summary_view(role, employee_id):
        employee = _summary_employee(employee_id)
        year, month = _month_args(container)
        summary = load_employee_summary(context.api, employee, year=year, month=month)
        return jsonify({
            "success": True,
            "title": summary_title(employee, year=year, month=month),
            "sections": [
                {"title": s.title, "columns": list(s.headers), "rows": [list(r) for r in s.rows]}
                for s in summary_sections(summary, include_history=True)
            ],
            "leave_days": leave_totals(summary),
        })

    @app.route("/<role>/summary/<employee_id>/stats", methods=["GET"], endpoint="summary_stats")
    @with_profile
    def summary_stats(role, employee_id):
        employee = _summary_employee(employee_id)
        year, month = _month_args(container)
        stats = load_monthly_stats(context.api, employee.employee_id, year=year, month=month)
        return jsonify({
            "success": True,
            "employee_id": employee.employee_id,
            "month": month,
            "year": year,
            "summary": dataclasses.asdict(stats.summary),
            "punctuality": dataclasses.asdict(stats.punctuality),
            "attendance_rate": stats.punctuality.attendance_rate,
            "rate_value": stats.rate_value,
        })

    @app.route("/<role>/summary/<employee_id>/export.xlsx", methods=["GET"], endpoint="summary_export_excel")
    @with_profile
    def summary_export_excel(role, employee_id):
        employee = _summary_employee(employee_id)
        year, month = _month_args(container)
        summary = load_employee_summary(context.api, employee, year=year, month=month)
        data = build_workbook(summary_sections(summary, include_history=False))
        return _send(data, SUMMARY_EXCEL_FILENAME, XLSX_MIMETYPE)

    @app.route("/<role>/summary/<employee_id>/export.pdf", methods=["GET"], endpoint="summary_export_pdf")
    @with_profile
    def summary_export_pdf(role, employee_id):
        employee = _summary_employee(employee_id)
        year, month = _month_args(container)
        summary = load_employee_summary(context.api, employee, year=year, month=month)
        data = build_pdf(summary_title(employee, year=year, month=month), summary_sections(summary, include_history=True))
        return _send(data, SUMMARY_PDF_FILENAME, PDF_MIMETYPE)

from __future__ import annotations

from datetime import date

from hr_reporting.attendance.model import AttendanceRecord
from hr_reporting.core.enums import AttendanceStatus, LeaveStatus, LeaveType, SortDirection
from hr_reporting.leave.model import LeaveRecord
from hr_reporting.reporting.definitions import ATTENDANCE, LEAVE
from hr_reporting.reporting.pipeline import FilterState, filter_options, run_pipeline


def _leave(n: int, *, status=LeaveStatus.APPROVED, project="Exozen-Ops", name=None, start=None) -> LeaveRecord:
    return LeaveRecord(
        leave_id=f"L{n}",
        employee_id=f"EMP{n:03d}",
        leave_type=LeaveType.EL,
        leave_type_label="EL",
        start_date=start or date(2025, 5, 1),
        end_date=start or date(2025, 5, 1),
        number_of_days=1,
        status=status,
        full_name=name or f"Person {n}",
        project_name=project,
        designation="Technician",
    )


def test_filter_is_a_conjunction():
    records = [
        _leave(1, project="Exozen-Ops"),
        _leave(2, project="Prestige Tower"),
        _leave(3, project="Exozen-Ops"),
        _leave(12, project="Exozen-Ops"),
    ]
    state = FilterState().with_search("EMP00").with_project("Exozen-Ops")
    result = run_pipeline(records, LEAVE, state)
    assert [r.employee_id for r in result.filtered_all] == ["EMP001", "EMP003"]


def test_search_is_case_insensitive_over_name():
    records = [_leave(1, name="Asha Rao"), _leave(2, name="Ravi Kumar")]
    result = run_pipeline(records, LEAVE, FilterState().with_search("asha"))
    assert [r.employee_id for r in result.filtered_all] == ["EMP001"]


def test_all_sentinel_is_inactive():
    records = [_leave(1), _leave(2, status=LeaveStatus.PENDING)]
    state = FilterState().with_status("All Statuses").with_project("All Projects")
    assert run_pipeline(records, LEAVE, state).filtered_count == 2


def test_status_filter_matches_display_value():
    records = [_leave(1), _leave(2, status=LeaveStatus.PENDING), _leave(3, status=LeaveStatus.REJECTED)]
    result = run_pipeline(records, LEAVE, FilterState().with_status("Approved"))
    assert [r.leave_id for r in result.filtered_all] == ["L1"]


def test_pagination_bounds():
    records = [_leave(n) for n in range(1, 48)]
    result = run_pipeline(records, LEAVE, FilterState().with_page(10))
    assert result.total_pages == 4
    assert result.current_page == 4
    assert len(result.page_rows) == 2
    assert result.page_rows[0].leave_id == "L46"
    assert result.filtered_count == 47


def test_page_below_one_clamps_to_first():
    records = [_leave(n) for n in range(1, 5)]
    result = run_pipeline(records, LEAVE, FilterState().with_page(0))
    assert result.current_page == 1
    assert len(result.page_rows) == 4


def test_empty_result_has_zero_pages_on_page_one():
    result = run_pipeline([], LEAVE, FilterState().with_page(3))
    assert result.total_pages == 0
    assert result.current_page == 1
    assert result.page_rows == ()


def test_sort_toggle_and_stability():
    records = [
        _leave(1, status=LeaveStatus.PENDING),
        _leave(2, status=LeaveStatus.APPROVED),
        _leave(3, status=LeaveStatus.PENDING),
        _leave(4, status=LeaveStatus.APPROVED),
    ]
    state = FilterState().sort_by("status")
    assert state.sort_direction is SortDirection.ASC
    asc = run_pipeline(records, LEAVE, state).filtered_all
    assert [r.leave_id for r in asc] == ["L2", "L4", "L1", "L3"]

    state = state.sort_by("status")
    assert state.sort_direction is SortDirection.DESC
    desc = run_pipeline(records, LEAVE, state).filtered_all
    assert [r.leave_id for r in desc] == ["L1", "L3", "L2", "L4"]


def test_new_sort_key_resets_to_ascending():
    state = FilterState().sort_by("status").sort_by("status").sort_by("full_name")
    assert state.sort_key == "full_name"
    assert state.sort_direction is SortDirection.ASC


def test_sort_is_case_insensitive():
    records = [_leave(1, name="bravo"), _leave(2, name="Alpha"), _leave(3, name="charlie")]
    result = run_pipeline(records, LEAVE, FilterState().sort_by("full_name"))
    assert [r.full_name for r in result.filtered_all] == ["Alpha", "bravo", "charlie"]


def test_any_change_resets_page():
    state = FilterState().with_page(3)
    assert state.with_search("x").current_page == 1
    assert state.with_project("P").current_page == 1
    assert state.with_designation("D").current_page == 1
    assert state.with_status("Approved").current_page == 1
    assert state.with_date_range(date(2025, 5, 1), None).current_page == 1
    assert state.sort_by("status").current_page == 1
    assert state.with_page(2).current_page == 2


def test_unchanged_filter_keeps_page():
    state = FilterState().with_search("x").with_page(3)
    assert state.with_search("x").current_page == 3


def _att(emp: str, day) -> AttendanceRecord:
    return AttendanceRecord(employee_id=emp, date=day, status=AttendanceStatus.PRESENT, project_name="P")


def test_date_range_is_inclusive():
    records = [_att("A", date(2025, 5, 1)), _att("B", date(2025, 5, 2)), _att("C", date(2025, 5, 3))]
    state = FilterState().with_date_range(date(2025, 5, 1), date(2025, 5, 2))
    assert [r.employee_id for r in run_pipeline(records, ATTENDANCE, state).filtered_all] == ["A", "B"]


def test_open_ended_date_bound():
    records = [_att("A", date(2025, 5, 1)), _att("B", date(2025, 5, 9))]
    state = FilterState().with_date_range(date(2025, 5, 5), None)
    assert [r.employee_id for r in run_pipeline(records, ATTENDANCE, state).filtered_all] == ["B"]


def test_undated_record_fails_active_bound_only():
    records = [_att("A", None), _att("B", date(2025, 5, 2))]
    assert run_pipeline(records, ATTENDANCE, FilterState()).filtered_count == 2
    state = FilterState().with_date_range(None, date(2025, 5, 31))
    assert [r.employee_id for r in run_pipeline(records, ATTENDANCE, state).filtered_all] == ["B"]


def test_search_matches_long_form_date():
    records = [_att("A", date(2025, 5, 1)), _att("B", date(2025, 6, 1))]
    result = run_pipeline(records, ATTENDANCE, FilterState().with_search("may 1"))
    assert [r.employee_id for r in result.filtered_all] == ["A"]


def test_filter_options_are_sorted_distinct():
    records = [_leave(1, project="Zeta"), _leave(2, project="alpha"), _leave(3, project="Zeta"), _leave(4, project=None)]
    assert filter_options(records, "project_name", "All Projects") == ["All Projects", "alpha", "Zeta"]
    assert filter_options(records, None, "All Statuses") == ["All Statuses"]

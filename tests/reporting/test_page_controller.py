from __future__ import annotations

import threading

import pytest

from hr_reporting.common.result import EmptyRoot, MalformedShape, Ok
from hr_reporting.core.enums import Action
from hr_reporting.core.exceptions import ActionInProgressError, FetchError
from hr_reporting.employees.model import Employee
from hr_reporting.reporting.controller import PageController
from hr_reporting.reporting.definitions import KYC
from hr_reporting.reporting.pipeline import FilterState


def _emp(emp_id: str, project: str = "Exozen - Ops") -> Employee:
    return Employee(employee_id=emp_id, full_name=f"Name {emp_id}", project_name=project, designation="Technician")


def test_refresh_loads_collection():
    page = PageController(KYC, lambda: Ok(records=(_emp("EMP001"), _emp("EMP002"))))
    assert page.refresh()
    assert [e.employee_id for e in page.collection] == ["EMP001", "EMP002"]
    assert page.error is None
    assert not page.loading


def test_stale_response_is_discarded():
    page = PageController(KYC, lambda: Ok(records=()))
    old = page.begin_refresh()
    new = page.begin_refresh()

    assert page.apply_result(new, Ok(records=(_emp("NEW"),)))
    assert not page.apply_result(old, Ok(records=(_emp("OLD"),)))
    assert [e.employee_id for e in page.collection] == ["NEW"]


def test_stale_failure_is_discarded():
    page = PageController(KYC, lambda: Ok(records=()))
    old = page.begin_refresh()
    new = page.begin_refresh()
    page.apply_result(new, Ok(records=(_emp("NEW"),)))
    assert not page.apply_failure(old, FetchError("boom"))
    assert page.error is None


def test_fetch_failure_sets_static_error_and_keeps_collection():
    calls = {"n": 0}

    def loader():
        calls["n"] += 1
        if calls["n"] > 1:
            raise FetchError("Network error: down")
        return Ok(records=(_emp("EMP001"),))

    page = PageController(KYC, loader)
    page.refresh()
    page.refresh()
    assert page.error == "Failed to fetch KYC requests"
    assert [e.employee_id for e in page.collection] == ["EMP001"]


def test_empty_and_malformed_are_distinct_from_errors():
    page = PageController(KYC, lambda: EmptyRoot(root_key="kycForms"))
    page.refresh()
    assert page.collection == ()
    assert page.error is None
    assert page.empty_reason

    page = PageController(KYC, lambda: MalformedShape(root_key="kycForms", found_type="dict"))
    page.refresh()
    assert page.error is None
    assert page.notice


def test_view_and_export_use_current_filter():
    page = PageController(KYC, lambda: Ok(records=tuple(_emp(f"EMP{i:03d}") for i in range(30))))
    page.refresh()
    page.update(FilterState().with_search("EMP00"))
    view = page.view()
    assert view.filtered_count == 10
    assert len(view.page_rows) == 10
    assert page.export_excel()[:2] == b"PK"
    assert page.export_pdf().startswith(b"%PDF")


def test_options_from_collection():
    page = PageController(KYC, lambda: Ok(records=(_emp("A", "Zeta"), _emp("B", "Alpha"))))
    page.refresh()
    assert page.options()["projects"] == ["All Projects", "Alpha", "Zeta"]
    assert page.options()["statuses"] == ["All Statuses"]


def test_replace_record_touches_only_target():
    page = PageController(KYC, lambda: Ok(records=(_emp("X"), _emp("Y"), _emp("Z"))))
    page.refresh()
    before = page.collection
    assert page.replace_record("Y", full_name="Changed")
    assert page.collection[0] is before[0]
    assert page.collection[2] is before[2]
    assert page.collection[1].full_name == "Changed"
    assert not page.replace_record("missing", full_name="nope")


def test_explicit_state_leaves_controller_state_alone():
    page = PageController(KYC, lambda: Ok(records=tuple(_emp(f"EMP{i:03d}") for i in range(30))))
    page.refresh()
    narrowed = page.view(FilterState().with_search("EMP02"))
    assert narrowed.filtered_count == 10
    assert page.state == FilterState()
    assert page.view().filtered_count == 30


def test_duplicate_action_from_another_thread_is_rejected():
    page = PageController(KYC, lambda: Ok(records=(_emp("EMP001"),)))
    started, release = threading.Event(), threading.Event()
    results = []

    def slow_call():
        started.set()
        release.wait(timeout=5)
        return "done"

    worker = threading.Thread(target=lambda: results.append(page.run_action("EMP001", Action.APPROVE, slow_call)))
    worker.start()
    assert started.wait(timeout=5)
    try:
        assert page.is_action_pending("EMP001", Action.APPROVE)
        with pytest.raises(ActionInProgressError):
            page.run_action("EMP001", Action.APPROVE, lambda: "again")
        assert page.run_action("EMP001", Action.REJECT, lambda: "other") == "other"
    finally:
        release.set()
        worker.join(timeout=5)
    assert results == ["done"]
    assert not page.is_action_pending("EMP001")

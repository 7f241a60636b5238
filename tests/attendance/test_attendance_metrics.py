from __future__ import annotations

from datetime import datetime

import pytest

from hr_reporting.attendance.metrics import (
    apply_metrics,
    classify_day,
    format_hours_hm,
    hours_worked,
    status_for_hours,
)
from hr_reporting.attendance.normalizer import (
    normalize_attendance,
    normalize_monthly_stats,
    normalize_monthly_summary,
)
from hr_reporting.core.enums import AttendanceStatus


def test_hours_worked_two_decimals():
    assert hours_worked("09:00:00", "17:30:00") == "8.50"


def test_hours_worked_from_iso_timestamps():
    assert hours_worked("2025-05-01T09:00:00.000Z", "2025-05-01T17:20:00.000Z") == "8.33"


@pytest.mark.parametrize(
    "punch_in,punch_out",
    [
        (None, "17:00:00"),
        ("09:00:00", None),
        ("17:30:00", "09:00:00"),
        ("not-a-time", "17:00:00"),
        ("", ""),
    ],
)
def test_hours_worked_sentinel(punch_in, punch_out):
    assert hours_worked(punch_in, punch_out) == "N/A"


def test_hours_worked_accepts_datetimes():
    assert hours_worked(datetime(2025, 5, 1, 9, 0), datetime(2025, 5, 1, 9, 0)) == "0.00"


def test_classify_day_passes_late_flag_through():
    assert classify_day(True) == "Late"
    assert classify_day(False) == "Regular"


def test_status_for_hours_thresholds():
    assert status_for_hours("7.00") is AttendanceStatus.PRESENT
    assert status_for_hours(4.5) is AttendanceStatus.HALF_DAY
    assert status_for_hours("4.49") is AttendanceStatus.ABSENT
    assert status_for_hours("N/A") is AttendanceStatus.ABSENT


def test_format_hours_hm():
    assert format_hours_hm("8.50") == "8h 30m"
    assert format_hours_hm("7.999") == "8h 0m"
    assert format_hours_hm("N/A") == "N/A"
    assert format_hours_hm("0.00") == "N/A"


def test_normalized_attendance_with_metrics(attendance_payload):
    result = normalize_attendance(attendance_payload)
    assert result.skipped == 1
    records = apply_metrics(result.records)
    by_id = {r.employee_id: r for r in records}

    assert by_id["EMP001"].hours_worked == "8.50"
    assert by_id["EMP001"].date.isoformat() == "2025-05-01"
    assert by_id["EMP001"].day_type == "Regular"
    assert by_id["EMP002"].hours_worked == "N/A"
    assert by_id["EMP002"].day_type == "Late"
    assert by_id["EMP003"].hours_worked == "N/A"
    assert by_id["EMP003"].status is AttendanceStatus.ABSENT


def test_unknown_status_is_unmarked():
    result = normalize_attendance({"attendance": [{"employeeId": "E", "status": "weird"}]})
    assert result.records[0].status is AttendanceStatus.UNMARKED
    assert result.records[0].date is None


def test_monthly_summary_defaults_to_zero():
    summary = normalize_monthly_summary({"data": {"summary": {"presentDays": 18, "el": 1}}}, "EMP001")
    assert summary.present_days == 18
    assert summary.el == 1
    assert summary.lop == 0
    assert normalize_monthly_summary(None, "EMP001").total_days == 0


def test_monthly_stats_rate_and_punctuality():
    stats = normalize_monthly_stats(
        {"data": {"attendanceRate": "82%", "punctualityIssues": {"lateArrivals": 3}}}, "EMP001"
    )
    assert stats.attendance_rate == "82%"
    assert stats.late_arrivals == 3
    assert stats.early_leaves == 0
    assert normalize_monthly_stats({}, "EMP001").attendance_rate == "0%"

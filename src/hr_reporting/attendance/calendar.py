"""Company holiday calendar.

Sundays, the 2nd and 4th Saturday of every month and the listed government
holidays are non-working days.
"""

from __future__ import annotations

from datetime import date

GOVT_HOLIDAYS = frozenset(
    date.fromisoformat(d)
    for d in (
        "2024-01-26", "2024-03-25", "2024-04-09", "2024-05-01", "2024-08-08",
        "2024-08-15", "2024-10-02", "2024-11-14", "2024-12-25",
        "2025-01-26", "2025-03-14", "2025-04-09", "2025-05-01", "2025-08-08",
        "2025-08-15", "2025-10-02", "2025-11-03", "2025-12-25",
        "2026-01-26", "2026-03-03", "2026-03-29", "2026-05-01", "2026-08-08",
        "2026-08-15", "2026-10-02", "2026-10-23", "2026-12-25",
        "2027-01-26", "2027-03-22", "2027-03-18", "2027-05-01", "2027-08-08",
        "2027-08-15", "2027-10-02", "2027-11-12", "2027-12-25",
        "2028-01-26", "2028-03-10", "2028-04-06", "2028-05-01", "2028-08-08",
        "2028-08-15", "2028-10-02", "2028-10-30", "2028-12-25",
    )
)


def is_second_or_fourth_saturday(day: date) -> bool:
    if day.weekday() != 5:
        return False
    return (day.day - 1) // 7 + 1 in (2, 4)


def is_holiday(day: date) -> bool:
    if day.weekday() == 6:
        return True
    if is_second_or_fourth_saturday(day):
        return True
    return day in GOVT_HOLIDAYS

"""Filter -> sort -> paginate over a canonical record collection."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Generic, Optional, Sequence, TypeVar

from ..common.datetime_utils import parse_calendar_date
from ..core.constants import ALL_DESIGNATIONS, ALL_PROJECTS, ALL_STATUSES
from ..core.enums import SortDirection
from .definitions import ReportDefinition
from .formatting import display, field_value, search_text, sort_text

T = TypeVar("T")

_ALL_SENTINELS = frozenset({ALL_PROJECTS, ALL_DESIGNATIONS, ALL_STATUSES, ""})


@dataclass(frozen=True)
class FilterState:
    """Filter/sort/page inputs owned by one page controller.

    Every ``with_*`` change (and ``sort_by``) returns a new state on page 1;
    only ``with_page`` moves the page.
    """

    search_text: str = ""
    project_filter: str = ALL_PROJECTS
    designation_filter: str = ALL_DESIGNATIONS
    status_filter: str = ALL_STATUSES
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    sort_key: Optional[str] = None
    sort_direction: SortDirection = SortDirection.ASC
    current_page: int = 1

    def _changed(self, **changes) -> "FilterState":
        if all(getattr(self, k) == v for k, v in changes.items()):
            return self
        return dataclasses.replace(self, current_page=1, **changes)

    def with_search(self, text: str) -> "FilterState":
        return self._changed(search_text=text or "")

    def with_project(self, value: str) -> "FilterState":
        return self._changed(project_filter=value or ALL_PROJECTS)

    def with_designation(self, value: str) -> "FilterState":
        return self._changed(designation_filter=value or ALL_DESIGNATIONS)

    def with_status(self, value: str) -> "FilterState":
        return self._changed(status_filter=value or ALL_STATUSES)

    def with_date_range(self, date_from: Optional[date], date_to: Optional[date]) -> "FilterState":
        return self._changed(date_from=date_from, date_to=date_to)

    def sort_by(self, key: str) -> "FilterState":
        """Same key toggles asc/desc; a different key starts ascending."""
        if key == self.sort_key:
            direction = self.sort_direction.toggled()
        else:
            direction = SortDirection.ASC
        return dataclasses.replace(self, sort_key=key, sort_direction=direction, current_page=1)

    def with_page(self, page: int) -> "FilterState":
        return dataclasses.replace(self, current_page=page)


@dataclass(frozen=True)
class PageResult(Generic[T]):
    page_rows: tuple
    total_pages: int
    filtered_all: tuple
    current_page: int

    @property
    def filtered_count(self) -> int:
        return len(self.filtered_all)


def is_active(filter_value: Optional[str]) -> bool:
    return filter_value is not None and filter_value not in _ALL_SENTINELS


def _matches_search(record: Any, definition: ReportDefinition, term: str) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    return any(needle in search_text(field_value(record, f)) for f in definition.search_fields)


def _matches_exact(record: Any, field_name: Optional[str], wanted: str) -> bool:
    if field_name is None or not is_active(wanted):
        return True
    return display(field_value(record, field_name), sentinel="") == wanted


def _matches_dates(record: Any, definition: ReportDefinition, state: FilterState) -> bool:
    if definition.date_field is None or (state.date_from is None and state.date_to is None):
        return True
    day = parse_calendar_date(field_value(record, definition.date_field))
    if day is None:
        return False
    if state.date_from is not None and day < state.date_from:
        return False
    if state.date_to is not None and day > state.date_to:
        return False
    return True


def filter_records(records: Sequence[T], definition: ReportDefinition, state: FilterState) -> list[T]:
    out = []
    for r in records:
        if not _matches_search(r, definition, state.search_text):
            continue
        if not (
            _matches_exact(r, definition.project_field, state.project_filter)
            and _matches_exact(r, definition.designation_field, state.designation_filter)
            and _matches_exact(r, definition.status_field, state.status_filter)
        ):
            continue
        if not _matches_dates(r, definition, state):
            continue
        out.append(r)
    return out


def sort_records(records: Sequence[T], key: Optional[str], direction: SortDirection) -> list[T]:
    if not key:
        return list(records)
    # sorted() is stable in both directions when reverse= is used
    return sorted(
        records,
        key=lambda r: sort_text(field_value(r, key)),
        reverse=direction is SortDirection.DESC,
    )


def total_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size) if count else 0


def clamp_page(page: int, pages: int) -> int:
    if pages <= 0:
        return 1
    return max(1, min(page, pages))


def paginate(records: Sequence[T], page: int, page_size: int) -> tuple[tuple, int, int]:
    pages = total_pages(len(records), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    return tuple(records[start:start + page_size]), pages, current


def run_pipeline(records: Sequence[T], definition: ReportDefinition, state: FilterState) -> PageResult[T]:
    filtered = filter_records(records, definition, state)
    ordered = sort_records(filtered, state.sort_key, state.sort_direction)
    rows, pages, current = paginate(ordered, state.current_page, definition.page_size)
    return PageResult(page_rows=rows, total_pages=pages, filtered_all=tuple(ordered), current_page=current)


def filter_options(records: Sequence[Any], field_name: Optional[str], all_label: str) -> list[str]:
    """``[all_label, *sorted distinct non-empty display values]``."""
    if field_name is None:
        return [all_label]
    values = {display(field_value(r, field_name), sentinel="") for r in records}
    values.discard("")
    return [all_label, *sorted(values, key=str.lower)]

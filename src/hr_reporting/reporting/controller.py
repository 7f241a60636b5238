from __future__ import annotations

import dataclasses
import itertools
import logging
import threading
from typing import Any, Callable, Generic, Optional, TypeVar

from ..common.result import EmptyRoot, MalformedShape, NormalizeResult
from ..core.constants import ALL_DESIGNATIONS, ALL_PROJECTS, ALL_STATUSES
from ..core.enums import Action
from ..core.exceptions import ActionInProgressError, FetchError
from .definitions import ReportDefinition
from .exporters import section_for
from .exporters.excel import build_workbook
from .exporters.pdf import build_pdf
from .formatting import field_value
from .pipeline import FilterState, PageResult, filter_options, run_pipeline

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class RefreshTicket:
    generation: int


class PageController(Generic[T]):
    """State holder for one report screen.

    Owns a single canonical collection and a single ``FilterState``. Fetches
    are ticketed: a result is applied only if no newer refresh was started in
    the meantime, so a late answer for stale parameters cannot overwrite the
    current collection.
    """

    def __init__(
        self,
        definition: ReportDefinition,
        loader: Callable[[], NormalizeResult],
    ):
        self.definition = definition
        self._loader = loader
        self._generations = itertools.count(1)
        self._current: Optional[RefreshTicket] = None
        self._pending: set[tuple[str, str]] = set()
        self._pending_lock = threading.Lock()

        self.collection: tuple = ()
        self.state = FilterState()
        self.loading = False
        self.error: Optional[str] = None
        self.empty_reason: Optional[str] = None
        self.notice: Optional[str] = None

    # Fetch lifecycle
    def begin_refresh(self) -> RefreshTicket:
        ticket = RefreshTicket(next(self._generations))
        self._current = ticket
        self.loading = True
        return ticket

    def is_current(self, ticket: RefreshTicket) -> bool:
        return self._current == ticket

    def apply_result(self, ticket: RefreshTicket, result: NormalizeResult) -> bool:
        if not self.is_current(ticket):
            logger.info("Discarding stale %s response (generation %d)", self.definition.name, ticket.generation)
            return False
        self.loading = False
        self.error = None
        self.empty_reason = None
        self.notice = None
        self.collection = tuple(result.records)
        if isinstance(result, EmptyRoot):
            self.empty_reason = f"No '{result.root_key}' data returned"
        elif isinstance(result, MalformedShape):
            self.notice = f"Unexpected '{result.root_key}' payload ({result.found_type})"
        return True

    def apply_failure(self, ticket: RefreshTicket, error: FetchError) -> bool:
        if not self.is_current(ticket):
            logger.info("Discarding stale %s failure (generation %d)", self.definition.name, ticket.generation)
            return False
        self.loading = False
        self.error = self.definition.error_message
        logger.warning("%s fetch failed: %s", self.definition.name, error.message)
        return True

    def refresh(self) -> bool:
        ticket = self.begin_refresh()
        try:
            result = self._loader()
        except FetchError as e:
            return self.apply_failure(ticket, e)
        return self.apply_result(ticket, result)

    # Filter/sort/page
    def update(self, state: FilterState) -> None:
        self.state = state

    def view(self, state: Optional[FilterState] = None) -> PageResult:
        return run_pipeline(self.collection, self.definition, state if state is not None else self.state)

    def options(self) -> dict[str, list[str]]:
        d = self.definition
        return {
            "projects": filter_options(self.collection, d.project_field, ALL_PROJECTS),
            "designations": filter_options(self.collection, d.designation_field, ALL_DESIGNATIONS),
            "statuses": filter_options(self.collection, d.status_field, ALL_STATUSES),
        }

    # Export (always the filtered, sorted and unpaginated set)
    def export_excel(self, state: Optional[FilterState] = None) -> bytes:
        return build_workbook([section_for(self.definition, self.view(state).filtered_all)])

    def export_pdf(self, state: Optional[FilterState] = None) -> bytes:
        d = self.definition
        return build_pdf(d.title, [section_for(d, self.view(state).filtered_all)], wide=d.landscape)

    # Optimistic status updates
    def is_action_pending(self, record_id: str, action: Optional[Action] = None) -> bool:
        if action is not None:
            return (record_id, action.value) in self._pending
        return any(rid == record_id for rid, _ in self._pending)

    def run_action(self, record_id: str, action: Action, call: Callable[[], Any]) -> Any:
        """Run ``call`` with ``record_id``+``action`` marked in flight.

        Raises ActionInProgressError if that exact pair is already running.
        """
        key = (record_id, action.value)
        with self._pending_lock:
            if key in self._pending:
                raise ActionInProgressError(f"{action.value} already in progress for {record_id}")
            self._pending.add(key)
        try:
            return call()
        finally:
            with self._pending_lock:
                self._pending.discard(key)

    def replace_record(self, record_id: str, **changes) -> bool:
        """Patch the single record whose key is ``record_id``; others stay untouched."""
        for i, record in enumerate(self.collection):
            if field_value(record, self.definition.id_field) == record_id:
                updated = dataclasses.replace(record, **changes)
                self.collection = self.collection[:i] + (updated,) + self.collection[i + 1:]
                return True
        return False

    def find(self, record_id: str) -> Optional[Any]:
        for record in self.collection:
            if field_value(record, self.definition.id_field) == record_id:
                return record
        return None

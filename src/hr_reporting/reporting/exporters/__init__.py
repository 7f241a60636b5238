"""Serialize report tables to downloadable artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..definitions import ReportDefinition


@dataclass(frozen=True)
class TableSection:
    """One named table: an Excel sheet or a logical PDF section."""

    title: str
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


def section_for(definition: ReportDefinition, records: Sequence[Any]) -> TableSection:
    return TableSection(
        title=definition.sheet_name,
        headers=tuple(definition.headers),
        rows=tuple(tuple(definition.row(r)) for r in records),
    )

from __future__ import annotations

import io
import logging
from typing import Sequence

import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from . import TableSection

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_HEADER_FILL = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
_MAX_SHEET_NAME = 31


def _style_sheet(ws, section: TableSection) -> None:
    for col_idx, header in enumerate(section.headers, start=1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = Font(bold=True)
        cell.fill = _HEADER_FILL
        widest = max([len(header), *(len(row[col_idx - 1]) for row in section.rows)])
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max(widest + 2, 12), 60)
    ws.freeze_panes = "A2"


def build_workbook(sections: Sequence[TableSection]) -> bytes:
    """Write every section to its own sheet; header row first, one row per record."""
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for section in sections:
            name = section.title[:_MAX_SHEET_NAME]
            df = pd.DataFrame(list(section.rows), columns=list(section.headers), dtype=object)
            df.to_excel(writer, index=False, sheet_name=name)
            _style_sheet(writer.sheets[name], section)
            logger.debug("Excel sheet %r: %d rows", name, len(section.rows))
    return output.getvalue()

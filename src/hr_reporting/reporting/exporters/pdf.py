from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import LongTable, Paragraph, SimpleDocTemplate, Spacer, TableStyle

from . import TableSection

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"
MARGIN = 12 * mm

PALETTE = {
    "header": colors.HexColor("#0F172A"),
    "grid": colors.HexColor("#E2E8F0"),
    "stripe_even": colors.HexColor("#F8FAFC"),
    "stripe_odd": colors.HexColor("#F1F5F9"),
}

_STYLES = getSampleStyleSheet()
TITLE_STYLE = ParagraphStyle("report-title", parent=_STYLES["Heading2"], fontName="Helvetica-Bold")
SECTION_STYLE = ParagraphStyle(
    "section-heading", parent=_STYLES["Heading5"], fontName="Helvetica-Bold", fontSize=11, leading=13, spaceAfter=4
)
HEADER_CELL_STYLE = ParagraphStyle(
    "table-header", parent=_STYLES["BodyText"], fontName="Helvetica-Bold", fontSize=8, leading=10,
    textColor=colors.white, wordWrap="CJK",
)
CELL_STYLE = ParagraphStyle(
    "table-cell", parent=_STYLES["BodyText"], fontName="Helvetica", fontSize=8, leading=10, wordWrap="CJK"
)


def table_data(section: TableSection) -> list[list[str]]:
    """Header row followed by one row per record, as plain strings."""
    return [list(section.headers), *[list(row) for row in section.rows]]


def _build_table(section: TableSection, width: float) -> LongTable:
    data: list[list[Any]] = [
        [Paragraph(escape(cell), HEADER_CELL_STYLE if i == 0 else CELL_STYLE) for cell in row]
        for i, row in enumerate(table_data(section))
    ]
    col_width = width / max(len(section.headers), 1)
    table = LongTable(data, colWidths=[col_width] * len(section.headers), repeatRows=1, hAlign="LEFT")
    commands: list[tuple[Any, ...]] = [
        ("BACKGROUND", (0, 0), (-1, 0), PALETTE["header"]),
        ("GRID", (0, 0), (-1, -1), 0.4, PALETTE["grid"]),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    for row_index in range(1, len(data)):
        stripe = PALETTE["stripe_even"] if row_index % 2 else PALETTE["stripe_odd"]
        commands.append(("BACKGROUND", (0, row_index), (-1, row_index), stripe))
    table.setStyle(TableStyle(commands))
    return table


def build_pdf(title: str, sections: Sequence[TableSection], *, wide: bool = False) -> bytes:
    """One document; each section is a heading plus a table that flows across pages."""
    buffer = BytesIO()
    pagesize = landscape(A4) if wide else A4
    doc = SimpleDocTemplate(
        buffer, pagesize=pagesize, leftMargin=MARGIN, rightMargin=MARGIN, topMargin=MARGIN, bottomMargin=MARGIN,
        title=title,
    )
    story: list[Any] = [Paragraph(escape(title), TITLE_STYLE), Spacer(1, 6)]
    for i, section in enumerate(sections):
        if i or len(sections) > 1:
            story.append(Paragraph(escape(section.title), SECTION_STYLE))
        story.append(_build_table(section, doc.width))
        story.append(Spacer(1, 10))
        logger.debug("PDF section %r: %d rows", section.title, len(section.rows))
    doc.build(story)
    return buffer.getvalue()

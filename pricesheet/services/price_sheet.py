"""Render one A4 price sheet page per parsed entry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import (
    Flowable,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from pricesheet.core.entries import Entry, EntryLayout, RejectedRow, parse_entries
from pricesheet.core.errors import NoDataError
from pricesheet.core.fields import FieldAccessor
from pricesheet_io.csv_reader import DEFAULT_DELIMITER, read_rows

LOGGER = logging.getLogger(__name__)

PAGE_MARGIN = 50.0
# SimpleDocTemplate frames pad their content by 6pt on every side.
_FRAME_PADDING = 6.0
# Title, crate, bottle and deposit type cells, as shares of the page height.
ROW_SHARES = (1 / 6, 2 / 6, 2 / 6, 1 / 6)

TITLE_STYLE = ParagraphStyle("PriceTitle", fontName="Times-Bold", fontSize=36, leading=43)
TEXT_STYLE = ParagraphStyle("PriceText", fontName="Times-Roman", fontSize=24, leading=29)

_TABLE_STYLE = TableStyle(
    [
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
)


@dataclass(frozen=True)
class SheetResult:
    """Outcome of a price sheet run."""

    output_path: Path
    entries: int
    rejected: List[RejectedRow]


def _paragraphs(style: ParagraphStyle, *texts: str) -> List[Flowable]:
    return [Paragraph(escape(text), style) for text in texts]


def _entry_table(entry: Entry, width: float, height: float) -> Table:
    cells = [
        [_paragraphs(TITLE_STYLE, entry.title)],
        [
            _paragraphs(
                TEXT_STYLE,
                entry.crate.contents,
                entry.crate.unit_price,
                entry.crate.price,
                entry.crate.deposit,
            )
        ],
        [_paragraphs(TEXT_STYLE, entry.bottle.contents, entry.bottle.price, entry.bottle.deposit)],
        [_paragraphs(TEXT_STYLE, entry.deposit_type.label)],
    ]
    table = Table(
        cells,
        colWidths=[width],
        rowHeights=[height * share for share in ROW_SHARES],
    )
    table.setStyle(_TABLE_STYLE)
    return table


def render_entries(
    entries: Sequence[Entry],
    output_path: Path,
    trailing_page_break: bool = False,
) -> Path:
    """Write one page per entry to ``output_path``.

    Pages are separated by page breaks; a break after the last entry (and
    therefore a blank final page) is only added with ``trailing_page_break``.
    """

    if not entries:
        raise NoDataError("No entries to render")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title="Price sheet",
    )
    width = doc.width - 2 * _FRAME_PADDING
    # One point of slack keeps rounding from pushing the table onto a new page.
    height = doc.height - 2 * _FRAME_PADDING - 1

    story: List[Flowable] = []
    for position, entry in enumerate(entries):
        story.append(_entry_table(entry, width, height))
        if position < len(entries) - 1 or trailing_page_break:
            story.append(PageBreak())
    if trailing_page_break:
        # reportlab drops a page that receives no flowable at all.
        story.append(Spacer(1, 1))
    doc.build(story)
    return output_path


def build_price_sheet(
    csv_path: Path,
    output_path: Path,
    accessor: Optional[FieldAccessor] = None,
    layout: Optional[EntryLayout] = None,
    start_line: int = 0,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = "utf-8",
    trailing_page_break: bool = False,
) -> SheetResult:
    """Parse every CSV row and render the valid ones as price sheet pages.

    Rows that fail to parse are logged and skipped.

    Raises:
        NoDataError: When no row parses into an entry.
    """

    rows = read_rows(csv_path, delimiter=delimiter, skip_lines=start_line, encoding=encoding)
    outcome = parse_entries(rows, accessor, layout)
    for rejected in outcome.rejected:
        LOGGER.warning(
            "Skipping record %d of %s (after %d skipped lines): %s",
            rejected.line,
            csv_path,
            start_line,
            rejected.error,
        )
    if not outcome.entries:
        raise NoDataError(f"No valid entries in {csv_path}")

    render_entries(outcome.entries, output_path, trailing_page_break=trailing_page_break)
    LOGGER.info(
        "Price sheet written: entries=%d rejected=%d output=%s",
        len(outcome.entries),
        len(outcome.rejected),
        output_path,
    )
    return SheetResult(
        output_path=output_path,
        entries=len(outcome.entries),
        rejected=outcome.rejected,
    )

"""Fill placeholder tokens of a template PDF from one CSV row."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from pricesheet.core.errors import NoDataError
from pricesheet.core.placeholders import find_placeholders, substitute
from pricesheet_io.csv_reader import DEFAULT_DELIMITER, read_rows
from pricesheet_io.pdf_io import DEFAULT_CONTENT_ENCODING, escape_pdf_string, rewrite_page_content

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FillResult:
    """Outcome of a template fill run."""

    output_path: Path
    row: Tuple[str, ...]
    placeholders: int


def fill_template(
    template_path: Path,
    output_path: Path,
    csv_path: Path,
    start_line: int = 0,
    limit: Optional[int] = None,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = "utf-8",
    pdf_encoding: str = DEFAULT_CONTENT_ENCODING,
) -> FillResult:
    """Substitute the first data row into page 1 of ``template_path``.

    Args:
        template_path: Template PDF with ``${<column>}`` tokens on page 1.
        output_path: Destination of the filled copy.
        csv_path: Delimited export supplying the row.
        start_line: Header lines skipped before the first data row.
        limit: Optional cap on the rows read from the export.

    Raises:
        NoDataError: When no row remains after skipping headers.
        InvalidAddressError: When a token is not a valid column address.
        FieldIndexError: When a token addresses a column beyond the row.
    """

    rows = read_rows(
        csv_path,
        delimiter=delimiter,
        skip_lines=start_line,
        limit=limit,
        encoding=encoding,
    )
    if not rows:
        raise NoDataError(f"No data rows in {csv_path} after skipping {start_line} lines")

    row = tuple(rows[0])
    found: list[str] = []

    def _fill(content: str) -> str:
        filled = substitute(row, content, escape=escape_pdf_string)
        found.extend(find_placeholders(content))
        return filled

    rewrite_page_content(template_path, output_path, _fill, page_number=1, encoding=pdf_encoding)
    LOGGER.info(
        "Filled template %s with %d placeholders -> %s",
        template_path,
        len(found),
        output_path,
    )
    return FillResult(output_path=output_path, row=row, placeholders=len(found))

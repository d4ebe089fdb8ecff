"""`pricesheet_io` top-level package exports the IO helpers for CSV and PDF flows."""

# Module responsibilities:
# - Re-export CSV ingestion and PDF template helpers so consumers have a stable API surface.

from __future__ import annotations

from .csv_reader import CsvDecodeError, read_rows, read_start_line
from .pdf_io import (
    PdfInfo,
    PdfProcessingError,
    escape_pdf_string,
    read_info,
    read_page_content,
    rewrite_page_content,
)

__all__ = [
    "CsvDecodeError",
    "read_rows",
    "read_start_line",
    "PdfInfo",
    "PdfProcessingError",
    "escape_pdf_string",
    "read_info",
    "read_page_content",
    "rewrite_page_content",
]

__version__ = "0.1.0"

"""Delimited text input helpers."""

# Module responsibilities:
# - Read semicolon-delimited exports into plain lists of string fields.
# - Honor header-skip and row-limit settings before any parsing happens.

from __future__ import annotations

import csv
from itertools import islice
from pathlib import Path
from typing import List, Optional

from .utils.log import get_logger

logger = get_logger("csv_reader")

DEFAULT_DELIMITER = ";"


class CsvDecodeError(RuntimeError):
    """Raised when an export is not valid text in the configured encoding."""

    def __init__(self, path: Path, encoding: str, line: int) -> None:
        super().__init__(f"{path} is not valid {encoding} text (after line {line})")
        self.path = path
        self.encoding = encoding
        self.line = line


def read_rows(
    path: Path,
    delimiter: str = DEFAULT_DELIMITER,
    skip_lines: int = 0,
    limit: Optional[int] = None,
    encoding: str = "utf-8",
) -> List[List[str]]:
    """Load every row of a delimited text file.

    Args:
        path: Path to the CSV export.
        delimiter: Field separator; a single character.
        skip_lines: Number of physical lines to discard before parsing,
            typically header lines.
        limit: Optional maximum number of rows returned.
        encoding: Text encoding of the file.

    Returns:
        Rows in file order, each a list of string fields. Blank lines come
        back as empty lists.

    Raises:
        FileNotFoundError: When the file does not exist.
        ValueError: When ``skip_lines`` or ``limit`` is negative.
        CsvDecodeError: When the file cannot be decoded with ``encoding``.
    """

    if skip_lines < 0:
        raise ValueError("skip_lines must not be negative")
    if limit is not None and limit < 0:
        raise ValueError("limit must not be negative")
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    logger.info(
        "Reading CSV rows",
        extra={"path": str(path), "skip_lines": skip_lines, "limit": limit},
    )

    lines_read = 0
    reader = None
    with path.open("r", encoding=encoding, newline="") as handle:
        try:
            for _ in range(skip_lines):
                if not handle.readline():
                    break
                lines_read += 1
            reader = csv.reader(handle, delimiter=delimiter)
            rows = [list(row) for row in islice(reader, limit)]
        except UnicodeDecodeError as exc:
            # Decoding runs ahead of parsing, so the line is a lower bound.
            line = lines_read + (reader.line_num if reader is not None else 0)
            logger.error(
                "CSV decode failed",
                extra={"path": str(path), "encoding": encoding, "line": line},
            )
            raise CsvDecodeError(path, encoding, line) from exc

    logger.info("CSV rows loaded", extra={"path": str(path), "rows": len(rows)})
    return rows


def read_start_line(path: Path) -> int:
    """Read a header-skip count stored on the first line of a text file."""

    if not path.exists():
        raise FileNotFoundError(f"Start line file not found: {path}")
    lines = path.read_text(encoding="utf-8").splitlines()
    if not lines or not lines[0].strip():
        raise ValueError(f"Start line file is empty: {path}")
    value = int(lines[0].strip())
    if value < 0:
        raise ValueError(f"Start line must not be negative: {value}")
    return value

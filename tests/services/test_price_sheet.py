"""Price sheet service tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest

from pricesheet.core.entries import POSITION_LAYOUT, parse_entries
from pricesheet.core.errors import NoDataError
from pricesheet.core.fields import PositionFieldAccessor
from pricesheet.services.price_sheet import build_price_sheet, render_entries
from pricesheet_io.pdf_io import read_info, read_page_content

ROWS = [
    "1;Cola;6 x 1.5L;0.50;12.00;3.00;1.5L;2.00;0.25;Mehrweg",
    "2;Water;12 x 0.7L;0.40;6.00;3.30;0.7L;0.60;0.15;mehrweg",
    "x;Broken;;;;;;;;Mehrweg",
    "4;Juice & Co <light>;6 x 1L;1.10;6.60;2.40;1L;1.20;0.25; Einweg",
]


def test_build_price_sheet_renders_one_page_per_valid_row(
    write_csv: Callable[..., Path],
    tmp_path: Path,
) -> None:
    csv_path = write_csv(["Nr;Name", *ROWS])
    output = tmp_path / "out" / "sheet.pdf"

    result = build_price_sheet(
        csv_path,
        output,
        PositionFieldAccessor(),
        POSITION_LAYOUT,
        start_line=1,
    )

    assert result.output_path == output
    assert result.entries == 3
    assert [rejected.line for rejected in result.rejected] == [3]
    assert read_info(output).page_count == 3


def test_trailing_page_break_adds_blank_page(
    write_csv: Callable[..., Path],
    tmp_path: Path,
) -> None:
    csv_path = write_csv(ROWS[:2])
    output = tmp_path / "sheet.pdf"

    build_price_sheet(
        csv_path,
        output,
        PositionFieldAccessor(),
        POSITION_LAYOUT,
        trailing_page_break=True,
    )

    assert read_info(output).page_count == 3


def test_build_price_sheet_letter_mode(
    write_csv: Callable[..., Path],
    letter_row: Callable[..., list[str]],
    tmp_path: Path,
) -> None:
    lines = [";".join(letter_row()), "", ";".join(letter_row(A="8", B="Water", AN="Einweg"))]
    csv_path = write_csv(lines)
    output = tmp_path / "sheet.pdf"

    result = build_price_sheet(csv_path, output)

    assert result.entries == 2
    assert result.rejected == []
    assert read_info(output).page_count == 2


def test_build_price_sheet_without_valid_rows(
    write_csv: Callable[..., Path],
    tmp_path: Path,
) -> None:
    csv_path = write_csv([ROWS[2]])
    output = tmp_path / "sheet.pdf"

    with pytest.raises(NoDataError):
        build_price_sheet(csv_path, output, PositionFieldAccessor(), POSITION_LAYOUT)
    assert not output.exists()


def test_render_entries_requires_entries(tmp_path: Path) -> None:
    with pytest.raises(NoDataError):
        render_entries([], tmp_path / "empty.pdf")


def test_render_entries_single_entry(tmp_path: Path) -> None:
    rows = [line.split(";") for line in ROWS[:1]]
    entries = parse_entries(rows, PositionFieldAccessor(), POSITION_LAYOUT).entries

    output = render_entries(entries, tmp_path / "single.pdf")

    assert read_info(output).page_count == 1


def test_rejected_rows_are_logged_by_record_number(
    write_csv: Callable[..., Path],
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    csv_path = write_csv(["Nr;Name", *ROWS])
    service_logger = logging.getLogger("pricesheet.services.price_sheet")
    service_logger.addHandler(caplog.handler)
    try:
        build_price_sheet(
            csv_path,
            tmp_path / "sheet.pdf",
            PositionFieldAccessor(),
            POSITION_LAYOUT,
            start_line=1,
        )
    finally:
        service_logger.removeHandler(caplog.handler)

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].startswith(f"Skipping record 3 of {csv_path} (after 1 skipped lines)")


def test_deposit_type_label_is_printed_upper_case(
    write_csv: Callable[..., Path],
    tmp_path: Path,
) -> None:
    output = tmp_path / "sheet.pdf"
    build_price_sheet(write_csv(ROWS[:1]), output, PositionFieldAccessor(), POSITION_LAYOUT)

    assert "(MEHRWEG)" in read_page_content(output)

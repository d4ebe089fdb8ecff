from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep log files out of the user's home directory during the test session.
os.environ.setdefault("PRICESHEET_HOME", tempfile.mkdtemp(prefix="pricesheet-tests-"))


def build_sample_pdf(path: Path, lines: Sequence[str]) -> None:
    """Write a minimal one-page PDF whose content stream shows ``lines``."""

    header = b"%PDF-1.4\n"
    body = "".join(f"72 {720 - 20 * idx} Td\n({line}) Tj\n" for idx, line in enumerate(lines))
    stream = f"BT\n/F1 14 Tf\n{body}ET\n".encode("latin-1")
    obj1 = b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n"
    obj2 = b"2 0 obj\n<< /Type /Pages /Kids [3 0 R] /Count 1 >>\nendobj\n"
    obj3 = (
        b"3 0 obj\n"
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792]"
        b" /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>\n"
        b"endobj\n"
    )
    obj4 = (
        f"4 0 obj\n<< /Length {len(stream)} >>\nstream\n".encode("latin-1")
        + stream
        + b"endstream\nendobj\n"
    )
    obj5 = b"5 0 obj\n<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>\nendobj\n"

    objects = [obj1, obj2, obj3, obj4, obj5]
    offsets = []
    data = bytearray()
    data.extend(header)
    for obj in objects:
        offsets.append(len(data))
        data.extend(obj)
    xref_offset = len(data)
    data.extend(b"xref\n0 6\n")
    data.extend(b"0000000000 65535 f \n")
    for offset in offsets:
        data.extend(f"{offset:010d} 00000 n \n".encode("latin-1"))
    data.extend(b"trailer\n<< /Size 6 /Root 1 0 R >>\n")
    data.extend(f"startxref\n{xref_offset}\n%%EOF\n".encode("latin-1"))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    def _make(*lines: str, name: str = "template.pdf") -> Path:
        path = tmp_path / name
        build_sample_pdf(path, lines)
        return path

    return _make


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    def _write(lines: Sequence[str], name: str = "input.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


def _letter_row(**overrides: str) -> list[str]:
    """A 40-column row shaped like the price list export (columns A..AN)."""

    row = [""] * 40
    defaults = {
        0: "7",  # A
        1: "Cola",  # B
        2: "6",  # C
        3: "1.5L",  # D
        10: "12.00",  # K
        11: "2.00",  # L
        35: "0.50",  # AJ
        37: "3.00",  # AL
        38: "0.25",  # AM
        39: "Mehrweg",  # AN
    }
    for index, value in defaults.items():
        row[index] = value
    letters = {"A": 0, "B": 1, "C": 2, "D": 3, "K": 10, "L": 11, "AJ": 35, "AL": 37, "AM": 38, "AN": 39}
    for column, value in overrides.items():
        row[letters[column]] = value
    return row


@pytest.fixture
def letter_row() -> Callable[..., list[str]]:
    return _letter_row

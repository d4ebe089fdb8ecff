"""PDF template read/rewrite utilities."""

# Module responsibilities:
# - Surface page count/metadata and the decoded content stream of template pages.
# - Rewrite a page's content stream through a text transform and save a copy.
# - Guard against encrypted or malformed PDFs with explicit failures.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from PyPDF2 import PageObject, PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError
from PyPDF2.generic import ArrayObject, DecodedStreamObject, NameObject

from .utils.log import get_logger

logger = get_logger("pdf_io")

DEFAULT_CONTENT_ENCODING = "latin-1"
_CONTENTS = NameObject("/Contents")

TextTransform = Callable[[str], str]


class PdfProcessingError(RuntimeError):
    """Raised when PDF operations fail."""


@dataclass(frozen=True)
class PdfInfo:
    """Metadata summary for a PDF file."""

    path: Path
    page_count: int
    metadata: Dict[str, str]
    encrypted: bool


def escape_pdf_string(value: str) -> str:
    """Escape characters with special meaning inside PDF literal strings."""

    return value.replace("\\", "\\\\").replace("(", r"\(").replace(")", r"\)")


def _resolve_pdf_reader(path: Path) -> PdfReader:
    if not path.exists():
        raise FileNotFoundError(f"PDF file not found: {path}")
    try:
        reader = PdfReader(path)
    except PdfReadError as exc:
        raise PdfProcessingError(f"Failed to open PDF: {exc}") from exc
    if reader.is_encrypted:
        raise PdfProcessingError("Encrypted PDFs are not supported")
    return reader


def _select_page(reader: PdfReader, page_number: int) -> PageObject:
    total_pages = len(reader.pages)
    if page_number < 1 or page_number > total_pages:
        raise PdfProcessingError(
            f"Page {page_number} out of range (document has {total_pages} pages)"
        )
    return reader.pages[page_number - 1]


def _content_bytes(page: PageObject) -> Optional[bytes]:
    if _CONTENTS not in page:
        return None
    contents = page[_CONTENTS].get_object()
    if isinstance(contents, ArrayObject):
        return b"\n".join(item.get_object().get_data() for item in contents)
    return contents.get_data()


def _store_content(page: PageObject, payload: bytes) -> None:
    contents = page[_CONTENTS].get_object()
    if isinstance(contents, DecodedStreamObject):
        contents.set_data(payload)
        return
    # Compressed or split content is replaced by one uncompressed stream.
    stream = DecodedStreamObject()
    stream.set_data(payload)
    page[_CONTENTS] = stream


def read_info(path: Path) -> PdfInfo:
    """Read metadata and page count for a PDF file."""

    reader = _resolve_pdf_reader(path)
    metadata = {k.lstrip("/"): str(v) for k, v in (reader.metadata or {}).items()}
    page_count = len(reader.pages)

    logger.info(
        "PDF info read",
        extra={"path": str(path), "page_count": page_count},
    )
    return PdfInfo(
        path=path,
        page_count=page_count,
        metadata=metadata,
        encrypted=False,
    )


def read_page_content(
    path: Path,
    page_number: int = 1,
    encoding: str = DEFAULT_CONTENT_ENCODING,
) -> str:
    """Return the decoded content stream of a 1-based page.

    Multiple content streams are joined with a newline; a page without
    content yields an empty string.
    """

    reader = _resolve_pdf_reader(path)
    page = _select_page(reader, page_number)
    data = _content_bytes(page)
    if data is None:
        return ""
    return data.decode(encoding)


def rewrite_page_content(
    path: Path,
    out_path: Path,
    transform: TextTransform,
    page_number: int = 1,
    encoding: str = DEFAULT_CONTENT_ENCODING,
) -> Path:
    """Rewrite one page's content stream and save the whole document.

    The content of the 1-based page is decoded with ``encoding``, passed
    through ``transform`` and stored back as a single uncompressed stream.
    All pages are written to ``out_path``. Nothing is written when
    ``transform`` raises.

    Raises:
        FileNotFoundError: When the template does not exist.
        PdfProcessingError: For unreadable/encrypted files, a page out of
            range, or transformed text that cannot be encoded.
    """

    reader = _resolve_pdf_reader(path)
    page = _select_page(reader, page_number)

    original = _content_bytes(page)
    if original is None:
        logger.warning(
            "Page has no content stream; copying unchanged",
            extra={"path": str(path), "page": page_number},
        )
    else:
        rewritten = transform(original.decode(encoding))
        try:
            payload = rewritten.encode(encoding)
        except UnicodeEncodeError as exc:
            raise PdfProcessingError(
                f"Rewritten content cannot be encoded as {encoding}: {exc}"
            ) from exc
        _store_content(page, payload)

    writer = PdfWriter()
    for source_page in reader.pages:
        writer.add_page(source_page)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("wb") as fh:
        writer.write(fh)

    logger.info(
        "Rewrote page content",
        extra={"source": str(path), "page": page_number, "output": str(out_path)},
    )
    return out_path

"""Document assembly services."""

from .price_sheet import SheetResult, build_price_sheet, render_entries
from .template_fill import FillResult, fill_template

__all__ = [
    "FillResult",
    "SheetResult",
    "build_price_sheet",
    "fill_template",
    "render_entries",
]

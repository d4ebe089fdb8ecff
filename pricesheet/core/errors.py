"""Custom exceptions used across pricesheet."""


class PriceSheetError(Exception):
    """Base error for the application."""


class ConfigError(PriceSheetError):
    """Configuration related error."""


class InvalidAddressError(PriceSheetError):
    """Raised when a column address is not a non-empty string of uppercase letters."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid column address: {address!r}")
        self.address = address


class FieldIndexError(PriceSheetError):
    """Raised when a resolved column index falls outside the current row."""

    def __init__(self, index: int, row_length: int, address: str | None = None) -> None:
        where = f"column {address} (index {index})" if address else f"index {index}"
        super().__init__(f"{where} out of range for row with {row_length} fields")
        self.index = index
        self.row_length = row_length
        self.address = address


class MalformedRowError(PriceSheetError):
    """Raised when a row cannot be parsed into an Entry."""


class NoDataError(PriceSheetError):
    """Raised when no usable row exists where at least one is required."""

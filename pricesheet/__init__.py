"""pricesheet: turn semicolon-delimited price lists into PDF documents."""

__version__ = "0.1.0"

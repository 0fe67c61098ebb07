"""Currency and range helpers for the Performance Decomposition workbook."""

from crossnegatives.sheets.currency import (
    CURRENCY_SYMBOLS,
    CurrencyCode,
    get_account_currency_symbol,
    get_currency_symbol,
    lookup_account_currency,
    normalize_currency_code,
)
from crossnegatives.sheets.ranges import (
    apply_currency_format,
    apply_number_format,
    apply_percentage_format,
    currency_number_format,
    iter_range_cells,
    parse_range,
)

__all__ = [
    "CURRENCY_SYMBOLS",
    "CurrencyCode",
    "apply_currency_format",
    "apply_number_format",
    "apply_percentage_format",
    "currency_number_format",
    "get_account_currency_symbol",
    "get_currency_symbol",
    "iter_range_cells",
    "lookup_account_currency",
    "normalize_currency_code",
    "parse_range",
]

"""Account currency lookup for the Performance Decomposition workbook."""

import logging
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from openpyxl.workbook.workbook import Workbook

from crossnegatives.core.exceptions import ConfigurationError, CurrencyLookupError
from crossnegatives.sheets.ranges import (
    ACCOUNT_CONTROL_CELL,
    CONTROL_SHEET,
    STATS_ACCOUNT_HEADER,
    STATS_CURRENCY_HEADER,
    STATS_HEADER_ROW,
    STATS_SHEET,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class CurrencyCode(str, Enum):
    """ISO 4217 codes of the account currencies Google Ads supports."""

    AED = "AED"
    ARS = "ARS"
    AUD = "AUD"
    BGN = "BGN"
    BOB = "BOB"
    BRL = "BRL"
    CAD = "CAD"
    CHF = "CHF"
    CLP = "CLP"
    CNY = "CNY"
    COP = "COP"
    CZK = "CZK"
    DKK = "DKK"
    EGP = "EGP"
    EUR = "EUR"
    GBP = "GBP"
    HKD = "HKD"
    HUF = "HUF"
    IDR = "IDR"
    ILS = "ILS"
    INR = "INR"
    JPY = "JPY"
    KES = "KES"
    KRW = "KRW"
    MAD = "MAD"
    MXN = "MXN"
    MYR = "MYR"
    NGN = "NGN"
    NOK = "NOK"
    NZD = "NZD"
    PEN = "PEN"
    PHP = "PHP"
    PKR = "PKR"
    PLN = "PLN"
    RON = "RON"
    RSD = "RSD"
    RUB = "RUB"
    SAR = "SAR"
    SEK = "SEK"
    SGD = "SGD"
    THB = "THB"
    TRY = "TRY"
    TWD = "TWD"
    UAH = "UAH"
    USD = "USD"
    UYU = "UYU"
    VND = "VND"
    ZAR = "ZAR"


def _validate_symbol_table(table: Mapping[CurrencyCode, str]) -> None:
    """Every CurrencyCode needs a non-empty display symbol."""
    missing = [code.value for code in CurrencyCode if not table.get(code)]
    if missing:
        raise ConfigurationError(
            f"Currency symbol table is missing: {', '.join(missing)}"
        )


CURRENCY_SYMBOLS: Mapping[CurrencyCode, str] = MappingProxyType(
    {
        CurrencyCode.AED: "د.إ",
        CurrencyCode.ARS: "AR$",
        CurrencyCode.AUD: "A$",
        CurrencyCode.BGN: "лв",
        CurrencyCode.BOB: "Bs",
        CurrencyCode.BRL: "R$",
        CurrencyCode.CAD: "CA$",
        CurrencyCode.CHF: "CHF",
        CurrencyCode.CLP: "CLP$",
        CurrencyCode.CNY: "¥",
        CurrencyCode.COP: "COL$",
        CurrencyCode.CZK: "Kč",
        CurrencyCode.DKK: "kr.",
        CurrencyCode.EGP: "E£",
        CurrencyCode.EUR: "€",
        CurrencyCode.GBP: "£",
        CurrencyCode.HKD: "HK$",
        CurrencyCode.HUF: "Ft",
        CurrencyCode.IDR: "Rp",
        CurrencyCode.ILS: "₪",
        CurrencyCode.INR: "₹",
        CurrencyCode.JPY: "¥",
        CurrencyCode.KES: "KSh",
        CurrencyCode.KRW: "₩",
        CurrencyCode.MAD: "MAD",
        CurrencyCode.MXN: "MX$",
        CurrencyCode.MYR: "RM",
        CurrencyCode.NGN: "₦",
        CurrencyCode.NOK: "kr",
        CurrencyCode.NZD: "NZ$",
        CurrencyCode.PEN: "S/",
        CurrencyCode.PHP: "₱",
        CurrencyCode.PKR: "₨",
        CurrencyCode.PLN: "zł",
        CurrencyCode.RON: "lei",
        CurrencyCode.RSD: "din.",
        CurrencyCode.RUB: "₽",
        CurrencyCode.SAR: "﷼",
        CurrencyCode.SEK: "kr",
        CurrencyCode.SGD: "S$",
        CurrencyCode.THB: "฿",
        CurrencyCode.TRY: "₺",
        CurrencyCode.TWD: "NT$",
        CurrencyCode.UAH: "₴",
        CurrencyCode.USD: "$",
        CurrencyCode.UYU: "$U",
        CurrencyCode.VND: "₫",
        CurrencyCode.ZAR: "R",
    }
)

_validate_symbol_table(CURRENCY_SYMBOLS)


def normalize_currency_code(code: Any) -> CurrencyCode:
    """Parse a currency code, ignoring case and surrounding whitespace.

    Raises:
        CurrencyLookupError: If the code is not supported
    """
    if isinstance(code, CurrencyCode):
        return code
    cleaned = str(code or "").strip().upper()
    try:
        return CurrencyCode(cleaned)
    except ValueError:
        raise CurrencyLookupError(f"Unsupported currency code: {code!r}") from None


def get_currency_symbol(code: Any, default: Any = _MISSING) -> str:
    """Display symbol for a currency code.

    Args:
        code: CurrencyCode or ISO code string
        default: Returned for unsupported codes instead of raising

    Raises:
        CurrencyLookupError: If the code is unsupported and no default is given
    """
    try:
        return CURRENCY_SYMBOLS[normalize_currency_code(code)]
    except CurrencyLookupError:
        if default is _MISSING:
            raise
        return default


def _header_columns(sheet: Any) -> dict[str, int]:
    headers = {}
    for cell in sheet[STATS_HEADER_ROW]:
        if cell.value is not None:
            headers[str(cell.value).strip().casefold()] = cell.column
    return headers


def lookup_account_currency(
    workbook: Workbook,
    control_sheet: str = CONTROL_SHEET,
    control_cell: str = ACCOUNT_CONTROL_CELL,
    stats_sheet: str = STATS_SHEET,
) -> CurrencyCode:
    """Currency of the account selected in the control cell.

    The account name is matched case-insensitively against the Account
    column of the imported stats table; the first matching row wins.

    Raises:
        CurrencyLookupError: If a sheet, column or the account is missing,
            or the account's currency is unsupported
    """
    for name in (control_sheet, stats_sheet):
        if name not in workbook.sheetnames:
            raise CurrencyLookupError(f"Workbook has no '{name}' sheet")

    account = workbook[control_sheet][control_cell].value
    if account is None or not str(account).strip():
        raise CurrencyLookupError(
            f"No account selected in {control_sheet}!{control_cell}"
        )
    account_key = str(account).strip().casefold()

    sheet = workbook[stats_sheet]
    headers = _header_columns(sheet)
    account_col = headers.get(STATS_ACCOUNT_HEADER.casefold())
    currency_col = headers.get(STATS_CURRENCY_HEADER.casefold())
    if account_col is None or currency_col is None:
        raise CurrencyLookupError(
            f"'{stats_sheet}' needs '{STATS_ACCOUNT_HEADER}' and "
            f"'{STATS_CURRENCY_HEADER}' columns"
        )

    for row in sheet.iter_rows(min_row=STATS_HEADER_ROW + 1, values_only=True):
        name = row[account_col - 1] if len(row) >= account_col else None
        if name is not None and str(name).strip().casefold() == account_key:
            currency = row[currency_col - 1] if len(row) >= currency_col else None
            logger.debug(f"Account '{account}' uses currency {currency}")
            return normalize_currency_code(currency)

    raise CurrencyLookupError(f"Account '{account}' not found in '{stats_sheet}'")


def get_account_currency_symbol(workbook: Workbook, **kwargs: Any) -> str:
    """Display symbol of the account selected in the control cell."""
    return get_currency_symbol(lookup_account_currency(workbook, **kwargs))

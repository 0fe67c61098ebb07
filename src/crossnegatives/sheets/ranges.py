"""Sheet range constants and helpers for the Performance Decomposition workbook."""

from collections.abc import Iterable, Iterator

from openpyxl.cell.cell import Cell
from openpyxl.utils.cell import range_boundaries
from openpyxl.worksheet.worksheet import Worksheet

# Control sheet: the account being decomposed is chosen in this cell
CONTROL_SHEET = "Control"
ACCOUNT_CONTROL_CELL = "C3"

# Imported stats table: one row per account, header on the first row
STATS_SHEET = "Imported Stats"
STATS_HEADER_ROW = 1
STATS_ACCOUNT_HEADER = "Account"
STATS_CURRENCY_HEADER = "Currency"

# Decomposition sheet ranges
DECOMPOSITION_SHEET = "Performance Decomposition"
CURRENCY_RANGES = (
    "C8:D20",  # cost and revenue, previous vs current period
    "F8:F20",  # absolute change
    "C24:H24",  # totals row
)
PERCENTAGE_RANGES = (
    "E8:E20",  # change as share of the previous period
    "G8:H20",  # contribution to the total change
)

PERCENTAGE_NUMBER_FORMAT = "0.00%"


def parse_range(a1_range: str) -> tuple[int, int, int, int]:
    """Bounds of an A1 range as (min_col, min_row, max_col, max_row).

    Raises:
        ValueError: If the range is not a bounded cell range
    """
    min_col, min_row, max_col, max_row = range_boundaries(a1_range)
    if None in (min_col, min_row, max_col, max_row):
        raise ValueError(f"Range must have explicit row and column bounds: {a1_range}")
    return min_col, min_row, max_col, max_row


def iter_range_cells(sheet: Worksheet, a1_range: str) -> Iterator[Cell]:
    """Cells of a range, row by row."""
    min_col, min_row, max_col, max_row = parse_range(a1_range)
    for row in sheet.iter_rows(
        min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col
    ):
        yield from row


def currency_number_format(symbol: str, decimals: int = 2) -> str:
    """Excel number format showing ``symbol`` before the amount."""
    escaped = symbol.replace('"', '\\"')
    pattern = "#,##0" + ("." + "0" * decimals if decimals > 0 else "")
    return f'"{escaped}"{pattern};-"{escaped}"{pattern}'


def apply_number_format(
    sheet: Worksheet, number_format: str, ranges: Iterable[str]
) -> int:
    """Set the number format of every cell in ``ranges``.

    Returns:
        Number of cells formatted
    """
    count = 0
    for a1_range in ranges:
        for cell in iter_range_cells(sheet, a1_range):
            cell.number_format = number_format
            count += 1
    return count


def apply_currency_format(
    sheet: Worksheet, symbol: str, ranges: Iterable[str] = CURRENCY_RANGES
) -> int:
    """Format the currency ranges of a sheet with the account's symbol."""
    return apply_number_format(sheet, currency_number_format(symbol), ranges)


def apply_percentage_format(
    sheet: Worksheet, ranges: Iterable[str] = PERCENTAGE_RANGES
) -> int:
    """Format the percentage ranges of a sheet."""
    return apply_number_format(sheet, PERCENTAGE_NUMBER_FORMAT, ranges)

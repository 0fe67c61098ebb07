"""Spreadsheet export of the negatives applied during a run."""

import logging
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.packaging.custom import StringProperty
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from crossnegatives.core.exceptions import SpreadsheetError
from crossnegatives.models.record import NegativeRecord, RunContext

logger = logging.getLogger(__name__)

REPORT_SHEET_TITLE = "Negatives"
HEADERS = ("Negative Keyword", "Added To", None, "Entities")
KEYWORD_COLUMN = 1
RECEIVERS_COLUMN = 2
ENTITY_COLUMN = 4
FIRST_DATA_ROW = 2
EDITORS_PROPERTY = "Editors"

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")


def _sort_key(keyword: str) -> tuple[str, str]:
    return (keyword.casefold(), keyword)


def build_report_rows(record: NegativeRecord) -> list[tuple[str, str]]:
    """One row per distinct negative keyword, sorted alphabetically.

    The second column lists every entity that received the keyword, joined
    with ", ", each entity once.
    """
    rows = []
    for literal, receivers in record.keywords.items():
        unique = list(dict.fromkeys(receivers))
        if unique:
            rows.append((literal, ", ".join(unique)))
    rows.sort(key=lambda row: _sort_key(row[0]))
    return rows


def sort_rows(
    sheet: Worksheet,
    min_row: int,
    max_row: int,
    min_col: int = KEYWORD_COLUMN,
    max_col: int = RECEIVERS_COLUMN,
    key_col: int = KEYWORD_COLUMN,
) -> None:
    """Sort a block of rows in place by one of its columns."""
    if max_row <= min_row:
        return

    block = [
        [cell.value for cell in row]
        for row in sheet.iter_rows(
            min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col
        )
    ]
    offset = key_col - min_col
    block.sort(key=lambda values: _sort_key(str(values[offset] or "")))

    for row_idx, values in enumerate(block, start=min_row):
        for col_idx, value in enumerate(values, start=min_col):
            sheet.cell(row=row_idx, column=col_idx, value=value)


class ReportExporter:
    """Write the run's NegativeRecord to a copy of the report workbook."""

    def __init__(
        self,
        output_dir: Path,
        template_path: Path | None = None,
        editors: Sequence[str] = (),
    ):
        """Initialize the exporter.

        Args:
            output_dir: Directory receiving one workbook per run
            template_path: Workbook copied for each report; blank when None
            editors: Addresses the report is shared with
        """
        self.output_dir = Path(output_dir)
        self.template_path = Path(template_path) if template_path else None
        self.editors = list(editors)

    def export(self, context: RunContext) -> Path:
        """Create the report workbook for a run.

        Returns:
            Path of the saved workbook

        Raises:
            SpreadsheetError: If the template cannot be read or the report saved
        """
        workbook = self._copy_template()
        sheet = self._report_sheet(workbook)

        self._write_header(sheet)

        rows = build_report_rows(context.record)
        for row_idx, (literal, receivers) in enumerate(rows, start=FIRST_DATA_ROW):
            sheet.cell(row=row_idx, column=KEYWORD_COLUMN, value=literal)
            sheet.cell(row=row_idx, column=RECEIVERS_COLUMN, value=receivers)
        sort_rows(sheet, FIRST_DATA_ROW, FIRST_DATA_ROW + len(rows) - 1)

        for row_idx, entity in enumerate(context.record.entities, start=FIRST_DATA_ROW):
            sheet.cell(row=row_idx, column=ENTITY_COLUMN, value=entity)

        sheet.freeze_panes = sheet.cell(row=FIRST_DATA_ROW, column=KEYWORD_COLUMN)
        sheet.column_dimensions["A"].width = 35
        sheet.column_dimensions["B"].width = 80
        sheet.column_dimensions["D"].width = 40

        self._set_editors(workbook)

        path = self.output_dir / self._filename(context)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            workbook.save(path)
        except OSError as e:
            raise SpreadsheetError(f"Failed to save report {path}: {e}") from e

        logger.info(f"Report with {len(rows)} keywords saved to {path}")
        return path

    def _copy_template(self) -> Workbook:
        if self.template_path is None:
            workbook = Workbook()
            workbook.active.title = REPORT_SHEET_TITLE
            return workbook

        try:
            return load_workbook(self.template_path)
        except (OSError, InvalidFileException, KeyError) as e:
            raise SpreadsheetError(
                f"Failed to open report template {self.template_path}: {e}"
            ) from e

    @staticmethod
    def _report_sheet(workbook: Workbook) -> Worksheet:
        """The template's report sheet with earlier data rows removed.

        A template without a report sheet gets a new one; its other sheets
        are left untouched.
        """
        if REPORT_SHEET_TITLE not in workbook.sheetnames:
            return workbook.create_sheet(REPORT_SHEET_TITLE)

        sheet = workbook[REPORT_SHEET_TITLE]
        if sheet.max_row >= FIRST_DATA_ROW:
            sheet.delete_rows(FIRST_DATA_ROW, sheet.max_row - FIRST_DATA_ROW + 1)
        return sheet

    @staticmethod
    def _write_header(sheet: Worksheet) -> None:
        for col_idx, header in enumerate(HEADERS, start=1):
            if header is None:
                continue
            cell = sheet.cell(row=1, column=col_idx, value=header)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL

    def _set_editors(self, workbook: Workbook) -> None:
        if not self.editors:
            return
        props = workbook.custom_doc_props
        if EDITORS_PROPERTY in props.names:
            del props[EDITORS_PROPERTY]
        props.append(StringProperty(name=EDITORS_PROPERTY, value=", ".join(self.editors)))

    @staticmethod
    def _filename(context: RunContext) -> str:
        return (
            f"cross-negatives-{context.started_at:%Y%m%d-%H%M%S}-{context.run_id}.xlsx"
        )


def build_email_body(context: RunContext) -> str:
    """Plain-text summary email: counters, run log, then the report link."""
    lines = [
        f"Cross negatives run {context.run_id}"
        + (" (dry run)" if context.dry_run else ""),
        "",
        f"Negatives attempted: {context.attempted}",
        f"Negatives added: {context.added}",
        f"Negatives failed: {context.failed}",
        f"Keywords skipped: {context.skipped}",
        "",
    ]

    if context.log_lines:
        lines.append("Log:")
        lines.extend(context.log_lines)
        lines.append("")

    if context.report_url:
        lines.append(f"Report: {context.report_url}")

    return "\n".join(lines)

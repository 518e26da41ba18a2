"""
Excel report generator for vendor reconciliation evidence.
Creates a multi-sheet workbook with the verdict and the supporting lines.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..config import ReconConfig
from ..models.evidence import Verdict, VendorIndicators
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
EQUAL_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
INSUFFICIENT_FILL = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
DIFFERENT_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

VERDICT_FILLS = {
    Verdict.BALANCES_EQUAL: EQUAL_FILL,
    Verdict.INSUFFICIENT_DATA: INSUFFICIENT_FILL,
    Verdict.BALANCES_DIFFERENT: DIFFERENT_FILL,
}

AMOUNT_FORMAT = "#,##0.00"


def _clean_text(value):
    """Drop characters that worksheets cannot store (PDF and OCR control codes)."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


class EvidenceReportGenerator:
    """Generates Excel reports of vendor evidence with multiple sheets."""

    def __init__(self, config: Optional[ReconConfig] = None):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config or ReconConfig()
        self.sheet_config = self.config.output.sheets

    def default_output_path(self, vendor: str, directory: Path = Path(".")) -> Path:
        """Build the report path from the configured filename template."""
        now = datetime.now()
        safe_vendor = "".join(ch if ch.isalnum() else "_" for ch in vendor).strip("_")
        filename = self.config.output.excel.filename_template.format(
            vendor=safe_vendor or "vendor",
            date=now.strftime("%Y%m%d"),
            time=now.strftime("%H%M%S"),
        )
        return directory / filename

    def generate_report(self, indicators: VendorIndicators, output_path: Path) -> Path:
        """
        Generate the evidence report.

        Args:
            indicators: Vendor indicators and verdict
            output_path: Path for output file

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If the workbook cannot be written
        """
        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()
        if wb.active:
            wb.remove(wb.active)

        if self.sheet_config.summary.enabled:
            self._create_summary_sheet(wb, indicators)
        if self.sheet_config.vendor_lines.enabled:
            self._create_vendor_lines_sheet(wb, indicators)
        if self.sheet_config.balances.enabled:
            self._create_balances_sheet(wb, indicators)

        # openpyxl cannot save a workbook without sheets
        if not wb.worksheets:
            wb.create_sheet(self.sheet_config.summary.name)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise ReportGenerationError(f"Failed to save report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path}")
        return output_path

    def _create_summary_sheet(self, wb: Workbook, indicators: VendorIndicators) -> None:
        """Create the summary sheet with the verdict and per-source counts."""
        ws = wb.create_sheet(self.sheet_config.summary.name)
        assessment = indicators.assessment

        ws["A1"] = "Vendor Balance Reconciliation"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        info = [
            ("Vendor:", indicators.vendor),
            ("Generated At:", datetime.now().strftime("%Y-%m-%d %H:%M:%S")),
            ("Config File:", self.config.config_file_path or "Default"),
        ]
        for i, (label, value) in enumerate(info, start=3):
            ws[f"A{i}"] = label
            self._set_cell(ws, i, 2, value)

        ws["A7"] = "Balance Assessment"
        ws["A7"].font = Font(bold=True)

        ws["A8"] = "Verdict:"
        ws["B8"] = assessment.verdict.value
        ws["B8"].fill = VERDICT_FILLS[assessment.verdict]
        ws["A9"] = "Description:"
        ws["B9"] = assessment.description
        ws["B9"].alignment = Alignment(wrap_text=True)
        ws["A10"] = "Reference Value:"
        ws["B10"] = assessment.reference_value if assessment.reference_value is not None else ""
        ws["B10"].number_format = AMOUNT_FORMAT
        ws["A11"] = "Spread:"
        ws["B11"] = assessment.spread if assessment.spread is not None else ""
        ws["B11"].number_format = AMOUNT_FORMAT
        ws["A12"] = "Tolerance:"
        ws["B12"] = self.config.balance.equality_tolerance

        ws["A14"] = "Sources"
        ws["A14"].font = Font(bold=True)

        headers = ["Source", "Lines Matched", "Balances Parsed", "Balances"]
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=15, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

        for row, (source, indicator) in enumerate(
            indicators.indicators_by_source.items(), start=16
        ):
            row_data = [
                self.config.sources.label_for(source),
                len(indicator.line_matches),
                len(indicator.parsed_balances),
                ", ".join(b.raw for b in indicator.parsed_balances),
            ]
            for col, value in enumerate(row_data, start=1):
                self._set_cell(ws, row, col, value).border = THIN_BORDER

        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 60
        ws.column_dimensions["C"].width = 18
        ws.column_dimensions["D"].width = 40

    def _create_vendor_lines_sheet(
        self, wb: Workbook, indicators: VendorIndicators
    ) -> None:
        """Create the sheet listing every matched vendor line."""
        ws = wb.create_sheet(self.sheet_config.vendor_lines.name)

        headers = ["Source", "Line", "Score", "Monetary Values", "Last Value"]
        self._write_headers(ws, headers)

        row_num = 2
        for source, indicator in indicators.indicators_by_source.items():
            for match in indicator.line_matches:
                row_data = [
                    self.config.sources.label_for(source),
                    match.original_line,
                    round(match.score, 2),
                    "; ".join(match.monetary_values),
                    match.last_value or "",
                ]
                for col, value in enumerate(row_data, start=1):
                    self._set_cell(ws, row_num, col, value).border = THIN_BORDER
                row_num += 1

        self._auto_fit_columns(ws)

    def _create_balances_sheet(self, wb: Workbook, indicators: VendorIndicators) -> None:
        """Create the sheet of parsed balance candidates."""
        ws = wb.create_sheet(self.sheet_config.balances.name)

        headers = ["Source", "Raw", "Numeric", "Line"]
        self._write_headers(ws, headers)

        fill = VERDICT_FILLS[indicators.verdict]
        row_num = 2
        for source, indicator in indicators.indicators_by_source.items():
            for balance in indicator.parsed_balances:
                row_data = [
                    self.config.sources.label_for(source),
                    balance.raw,
                    balance.numeric,
                    balance.original_line,
                ]
                for col, value in enumerate(row_data, start=1):
                    cell = self._set_cell(ws, row_num, col, value)
                    cell.border = THIN_BORDER
                    cell.fill = fill
                ws.cell(row=row_num, column=3).number_format = AMOUNT_FORMAT
                row_num += 1

        self._auto_fit_columns(ws)

    def _set_cell(self, ws: Worksheet, row: int, column: int, value):
        """
        Write a cell value taken from report text.

        Report lines are data, so a leading "=" is kept as text rather than
        being stored as a formula.
        """
        value = _clean_text(value)
        cell = ws.cell(row=row, column=column, value=value)
        if isinstance(value, str) and value.startswith("="):
            cell.data_type = "s"
        return cell

    def _write_headers(self, ws: Worksheet, headers: list[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        for column_cells in ws.columns:
            column = column_cells[0].column_letter
            max_length = max(
                (len(str(cell.value)) for cell in column_cells if cell.value is not None),
                default=0,
            )
            ws.column_dimensions[column].width = min(max_length + 2, 80)

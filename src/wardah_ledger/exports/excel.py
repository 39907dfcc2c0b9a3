"""Excel export of the trial balance.

Uses openpyxl for workbook generation.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from pathlib import Path

import structlog
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from wardah_ledger import labels
from wardah_ledger.models import Language, TrialBalanceRow, TrialBalanceTotals

logger = structlog.get_logger(__name__)

HEADER_FILL = PatternFill(start_color="428BCA", end_color="428BCA", fill_type="solid")
TOTALS_FILL = PatternFill(start_color="F0F0F0", end_color="F0F0F0", fill_type="solid")
AMOUNT_FORMAT = "#,##0.00"


def _amount(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01")))


def style_header_row(ws, row_num: int, col_count: int) -> None:
    """Apply header styling to a row."""
    for col in range(1, col_count + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")


def auto_width_columns(ws) -> None:
    """Size columns to their longest value."""
    for idx, column_cells in enumerate(ws.columns, start=1):
        max_length = max((len(str(cell.value)) for cell in column_cells if cell.value), default=0)
        ws.column_dimensions[get_column_letter(idx)].width = min(max_length + 2, 50)


def build_workbook(
    rows: Sequence[TrialBalanceRow],
    totals: TrialBalanceTotals,
    language: Language = "ar",
) -> Workbook:
    """Build a one-sheet workbook: header row, one row per account, totals row."""
    wb = Workbook()
    ws = wb.active
    ws.title = labels.TITLE[language]
    if language == "ar":
        ws.sheet_view.rightToLeft = True

    headers = labels.SHEET_HEADERS[language]
    ws.append(headers)
    style_header_row(ws, 1, len(headers))

    for row in rows:
        ws.append(
            [row.account_code, row.display_name(language), row.account_type]
            + [_amount(value) for value in row.amounts()]
        )

    ws.append(["", labels.TOTALS[language], ""] + [_amount(value) for value in totals.amounts()])
    totals_row = ws.max_row
    for col in range(1, len(headers) + 1):
        cell = ws.cell(row=totals_row, column=col)
        cell.font = Font(bold=True)
        cell.fill = TOTALS_FILL

    for row_cells in ws.iter_rows(min_row=2, min_col=4, max_col=len(headers)):
        for cell in row_cells:
            cell.number_format = AMOUNT_FORMAT

    ws.freeze_panes = "A2"
    auto_width_columns(ws)
    return wb


def export_to_excel(
    rows: Sequence[TrialBalanceRow],
    totals: TrialBalanceTotals,
    from_date: date,
    as_of_date: date,
    language: Language = "ar",
    directory: Path | str = ".",
) -> Path:
    """Write ``trial-balance-<as_of_date>.xlsx`` into ``directory``."""
    path = Path(directory) / labels.export_filename(as_of_date.isoformat(), "xlsx")
    path.parent.mkdir(parents=True, exist_ok=True)
    build_workbook(rows, totals, language).save(path)
    logger.info(
        "trial_balance_exported",
        format="xlsx",
        path=str(path),
        rows=len(rows),
        from_date=from_date.isoformat(),
    )
    return path

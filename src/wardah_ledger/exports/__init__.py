"""Spreadsheet and PDF renderings of the trial balance."""

from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Literal

from wardah_ledger.exports.excel import build_workbook, export_to_excel
from wardah_ledger.exports.pdf import build_pdf, export_to_pdf
from wardah_ledger.models import Language, TrialBalanceRow, TrialBalanceTotals

ExportFormat = Literal["xlsx", "pdf"]

EXPORT_FORMATS: tuple[ExportFormat, ...] = ("xlsx", "pdf")


def export_report(
    fmt: ExportFormat,
    rows: Sequence[TrialBalanceRow],
    totals: TrialBalanceTotals,
    from_date: date,
    as_of_date: date,
    language: Language = "ar",
    directory: Path | str = ".",
) -> Path:
    """Write the report in ``fmt`` and return the file path."""
    if fmt == "xlsx":
        return export_to_excel(rows, totals, from_date, as_of_date, language, directory)
    if fmt == "pdf":
        return export_to_pdf(rows, totals, from_date, as_of_date, language, directory)
    raise ValueError(f"Unsupported export format: {fmt}")


__all__ = [
    "EXPORT_FORMATS",
    "ExportFormat",
    "build_pdf",
    "build_workbook",
    "export_report",
    "export_to_excel",
    "export_to_pdf",
]

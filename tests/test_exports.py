"""Tests for spreadsheet and PDF exports."""

from datetime import date
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from wardah_ledger import labels
from wardah_ledger.exports import export_report
from wardah_ledger.exports.excel import build_workbook
from wardah_ledger.exports.pdf import build_pdf, shape_text
from wardah_ledger.models import TrialBalanceRow
from wardah_ledger.totals import calculate_totals

FROM_DATE = date(2024, 1, 1)
AS_OF_DATE = date(2024, 6, 30)


@pytest.fixture
def rows():
    return [
        TrialBalanceRow(
            account_code="1001",
            account_name="Cash",
            account_name_ar="النقدية",
            account_type="asset",
            opening_debit=Decimal("1000"),
            period_debit=Decimal("500"),
            period_credit=Decimal("200"),
            closing_debit=Decimal("1300"),
        ),
        TrialBalanceRow(
            account_code="4001",
            account_name="Sales",
            account_type="revenue",
            opening_credit=Decimal("2000"),
            period_credit=Decimal("1000"),
            closing_credit=Decimal("3000"),
        ),
    ]


class TestExcelExport:
    """Tests for the workbook export."""

    def test_english_workbook_layout(self, rows):
        wb = build_workbook(rows, calculate_totals(rows), language="en")
        ws = wb.active

        assert ws.title == "Trial Balance"
        assert [cell.value for cell in ws[1]] == labels.SHEET_HEADERS["en"]
        assert [cell.value for cell in ws[2]][:3] == ["1001", "Cash", "asset"]
        assert ws.cell(row=2, column=9).value == 0
        assert ws.cell(row=2, column=8).value == 1300
        totals_row = [cell.value for cell in ws[4]]
        assert totals_row[1] == "TOTALS"
        assert totals_row[3:] == [1000, 2000, 500, 1200, 1300, 3000]

    def test_arabic_workbook_uses_arabic_names(self, rows):
        wb = build_workbook(rows, calculate_totals(rows), language="ar")
        ws = wb.active

        assert ws.title == labels.TITLE["ar"]
        assert ws.sheet_view.rightToLeft
        assert ws.cell(row=2, column=2).value == "النقدية"
        # No Arabic name: falls back to the English one
        assert ws.cell(row=3, column=2).value == "Sales"
        assert ws.cell(row=4, column=2).value == labels.TOTALS["ar"]

    def test_export_writes_named_file(self, rows, tmp_path):
        path = export_report(
            "xlsx", rows, calculate_totals(rows), FROM_DATE, AS_OF_DATE, "en", tmp_path
        )

        assert path.name == "trial-balance-2024-06-30.xlsx"
        ws = load_workbook(path).active
        assert ws.max_row == 4

    def test_empty_report_still_has_totals_row(self):
        wb = build_workbook([], calculate_totals([]), language="en")
        ws = wb.active

        assert ws.max_row == 2
        assert ws.cell(row=2, column=2).value == "TOTALS"


class TestPdfExport:
    """Tests for the PDF export."""

    def test_build_pdf_returns_document(self, rows):
        data = build_pdf(rows, calculate_totals(rows), FROM_DATE, AS_OF_DATE, language="en")

        assert data.startswith(b"%PDF")

    def test_arabic_pdf_renders(self, rows):
        data = build_pdf(rows, calculate_totals(rows), FROM_DATE, AS_OF_DATE, language="ar")

        assert data.startswith(b"%PDF")

    def test_export_writes_named_file(self, rows, tmp_path):
        path = export_report(
            "pdf", rows, calculate_totals(rows), FROM_DATE, AS_OF_DATE, "en", tmp_path
        )

        assert path.name == "trial-balance-2024-06-30.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_shape_text_leaves_english_alone(self):
        assert shape_text("Trial Balance", "en") == "Trial Balance"

    def test_shape_text_reshapes_arabic(self):
        shaped = shape_text(labels.TITLE["ar"], "ar")

        assert shaped != labels.TITLE["ar"]


def test_unknown_format_is_rejected(rows, tmp_path):
    with pytest.raises(ValueError):
        export_report("csv", rows, calculate_totals(rows), FROM_DATE, AS_OF_DATE, "en", tmp_path)

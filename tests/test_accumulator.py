"""Tests for the balance accumulator."""

from datetime import date
from decimal import Decimal

from conftest import AS_OF_DATE, FROM_DATE

from wardah_ledger.accumulator import accumulate_balances, net_closing
from wardah_ledger.models import Account, ModernLineRecord, PostedLine
from wardah_ledger.totals import calculate_totals


def line(account_id: str, debit: str, credit: str, on: date | None) -> PostedLine:
    return PostedLine(
        account_id=account_id,
        debit=Decimal(debit),
        credit=Decimal(credit),
        effective_date=on,
    )


class TestNetClosing:
    """Tests for netting debit against credit."""

    def test_debit_side_larger(self):
        assert net_closing(Decimal("1500"), Decimal("200")) == (Decimal("1300"), Decimal("0"))

    def test_credit_side_larger(self):
        assert net_closing(Decimal("100"), Decimal("800")) == (Decimal("0"), Decimal("700"))

    def test_equal_sides_are_zero(self):
        assert net_closing(Decimal("250"), Decimal("250")) == (Decimal("0"), Decimal("0"))


class TestAccumulateBalances:
    """Tests for accumulate_balances."""

    def test_worked_example_totals(self, sample_accounts, modern_line_records):
        """Test the Cash / Payables / Sales example end to end."""
        lines = [
            ModernLineRecord.from_record(record).to_posted_line()
            for record in modern_line_records
        ]

        rows = accumulate_balances(sample_accounts, lines, FROM_DATE, AS_OF_DATE)
        totals = calculate_totals(rows)

        assert totals.opening_debit == Decimal("1000")
        assert totals.opening_credit == Decimal("2500")
        assert totals.period_debit == Decimal("600")
        assert totals.period_credit == Decimal("1500")
        assert totals.closing_debit == Decimal("1300")
        assert totals.closing_credit == Decimal("3700")

    def test_rows_follow_account_order(self, sample_accounts, modern_line_records):
        lines = [
            ModernLineRecord.from_record(record).to_posted_line()
            for record in modern_line_records
        ]

        rows = accumulate_balances(sample_accounts, lines, FROM_DATE, AS_OF_DATE)

        assert [row.account_code for row in rows] == ["1001", "2001", "4001"]
        cash, payables, sales = rows
        assert (cash.closing_debit, cash.closing_credit) == (Decimal("1300"), Decimal("0"))
        assert (payables.closing_debit, payables.closing_credit) == (Decimal("0"), Decimal("700"))
        assert (sales.closing_debit, sales.closing_credit) == (Decimal("0"), Decimal("3000"))

    def test_closing_sides_are_mutually_exclusive(self, sample_accounts):
        lines = [
            line("acc-1001", "10", "0", date(2023, 6, 1)),
            line("acc-1001", "0", "25", date(2024, 6, 1)),
            line("acc-2001", "40", "40", date(2024, 2, 1)),
            line("acc-4001", "0", "5", date(2024, 2, 1)),
            line("acc-4001", "7", "0", date(2023, 2, 1)),
        ]

        rows = accumulate_balances(sample_accounts, lines, FROM_DATE, AS_OF_DATE)

        for row in rows:
            assert row.closing_debit * row.closing_credit == 0

    def test_line_on_from_date_is_period_movement(self, sample_accounts):
        """Test that the from-date boundary is inclusive on the period side."""
        rows = accumulate_balances(
            sample_accounts,
            [line("acc-1001", "75", "0", FROM_DATE)],
            FROM_DATE,
            AS_OF_DATE,
        )

        assert rows[0].period_debit == Decimal("75")
        assert rows[0].opening_debit == Decimal("0")

    def test_line_before_from_date_is_opening(self, sample_accounts):
        rows = accumulate_balances(
            sample_accounts,
            [line("acc-1001", "0", "30", date(2023, 12, 31))],
            FROM_DATE,
            AS_OF_DATE,
        )

        assert rows[0].opening_credit == Decimal("30")
        assert rows[0].period_credit == Decimal("0")

    def test_line_on_as_of_date_is_included(self, sample_accounts):
        rows = accumulate_balances(
            sample_accounts,
            [line("acc-1001", "12", "0", AS_OF_DATE)],
            FROM_DATE,
            AS_OF_DATE,
        )

        assert rows[0].period_debit == Decimal("12")

    def test_future_lines_are_ignored(self, sample_accounts):
        rows = accumulate_balances(
            sample_accounts,
            [line("acc-1001", "99", "0", date(2025, 1, 1))],
            FROM_DATE,
            AS_OF_DATE,
        )

        assert rows == []

    def test_lines_without_date_or_known_account_are_skipped(self, sample_accounts):
        rows = accumulate_balances(
            sample_accounts,
            [
                line("acc-1001", "10", "0", None),
                line("acc-9999", "10", "0", date(2024, 2, 1)),
            ],
            FROM_DATE,
            AS_OF_DATE,
        )

        assert rows == []

    def test_accounts_without_movement_are_dropped(self, sample_accounts):
        rows = accumulate_balances(
            sample_accounts,
            [line("acc-2001", "0", "10", date(2024, 2, 1))],
            FROM_DATE,
            AS_OF_DATE,
        )

        assert [row.account_code for row in rows] == ["2001"]

    def test_balanced_account_is_kept_with_zero_closing(self, sample_accounts):
        """Test that an account whose movements cancel out still appears."""
        rows = accumulate_balances(
            sample_accounts,
            [
                line("acc-1001", "50", "0", date(2023, 5, 1)),
                line("acc-1001", "0", "50", date(2024, 5, 1)),
            ],
            FROM_DATE,
            AS_OF_DATE,
        )

        assert len(rows) == 1
        assert rows[0].closing_debit == Decimal("0")
        assert rows[0].closing_credit == Decimal("0")

    def test_posting_date_wins_over_entry_date(self):
        account = Account(id="a", code="1100", name="Bank", account_type="asset")
        record = ModernLineRecord.from_record(
            {
                "account_id": "a",
                "debit": "40",
                "credit": "0",
                "gl_entries": {"entry_date": "2023-12-30", "posting_date": "2024-01-02"},
            }
        )

        rows = accumulate_balances([account], [record.to_posted_line()], FROM_DATE, AS_OF_DATE)

        assert rows[0].period_debit == Decimal("40")
        assert rows[0].opening_debit == Decimal("0")

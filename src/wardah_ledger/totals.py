"""Column totals, type filtering and the balance check for trial balance rows."""

from collections.abc import Sequence
from decimal import Decimal

from wardah_ledger.models import ZERO, TrialBalanceRow, TrialBalanceTotals

ALL_TYPES = "all"

# Allow for small rounding differences
BALANCE_TOLERANCE = Decimal("0.01")


def calculate_totals(rows: Sequence[TrialBalanceRow]) -> TrialBalanceTotals:
    """Sum the six amount columns across ``rows`` in one pass."""
    opening_debit = opening_credit = ZERO
    period_debit = period_credit = ZERO
    closing_debit = closing_credit = ZERO

    for row in rows:
        opening_debit += row.opening_debit
        opening_credit += row.opening_credit
        period_debit += row.period_debit
        period_credit += row.period_credit
        closing_debit += row.closing_debit
        closing_credit += row.closing_credit

    return TrialBalanceTotals(
        opening_debit=opening_debit,
        opening_credit=opening_credit,
        period_debit=period_debit,
        period_credit=period_credit,
        closing_debit=closing_debit,
        closing_credit=closing_credit,
    )


def filter_balances_by_type(
    rows: Sequence[TrialBalanceRow], account_type: str
) -> list[TrialBalanceRow]:
    """Keep rows of one account type; ``"all"`` keeps every row in order."""
    if account_type == ALL_TYPES:
        return list(rows)
    return [row for row in rows if row.account_type == account_type]


def differences(totals: TrialBalanceTotals) -> dict[str, Decimal]:
    """Absolute debit/credit differences per column pair."""
    return {
        "opening": abs(totals.opening_debit - totals.opening_credit),
        "period": abs(totals.period_debit - totals.period_credit),
        "closing": abs(totals.closing_debit - totals.closing_credit),
    }


def is_balanced(totals: TrialBalanceTotals) -> bool:
    """Check that every column pair balances within the rounding tolerance."""
    return all(diff < BALANCE_TOLERANCE for diff in differences(totals).values())

"""Balance accumulator: folds posted lines into per-account trial balance rows."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

import structlog

from wardah_ledger.models import ZERO, Account, PostedLine, TrialBalanceRow

logger = structlog.get_logger(__name__)


def net_closing(total_debit: Decimal, total_credit: Decimal) -> tuple[Decimal, Decimal]:
    """Net debit against credit; the larger side keeps the excess.

    Returns:
        ``(closing_debit, closing_credit)``, at most one of them nonzero.
    """
    if total_debit > total_credit:
        return total_debit - total_credit, ZERO
    if total_credit > total_debit:
        return ZERO, total_credit - total_debit
    return ZERO, ZERO


def apply_closing(row: TrialBalanceRow) -> TrialBalanceRow:
    """Fill the closing columns of a row from its opening and period columns."""
    row.closing_debit, row.closing_credit = net_closing(
        row.opening_debit + row.period_debit,
        row.opening_credit + row.period_credit,
    )
    return row


def accumulate_balances(
    accounts: Iterable[Account],
    lines: Iterable[PostedLine],
    from_date: date,
    as_of_date: date,
) -> list[TrialBalanceRow]:
    """Compute the trial balance for ``[from_date, as_of_date]``.

    Lines dated before ``from_date`` feed the opening columns, lines dated
    from ``from_date`` (inclusive) up to ``as_of_date`` feed the period
    columns, and later lines are ignored. Accounts without any opening or
    period movement are left out of the result. Rows keep the order of
    ``accounts``.
    """
    rows: dict[str, TrialBalanceRow] = {}
    for account in accounts:
        rows[account.id] = TrialBalanceRow.from_account(account)

    skipped = 0
    for line in lines:
        row = rows.get(line.account_id)
        if row is None or line.effective_date is None:
            skipped += 1
            continue
        if line.effective_date > as_of_date:
            skipped += 1
            continue

        if line.effective_date >= from_date:
            row.period_debit += line.debit
            row.period_credit += line.credit
        else:
            row.opening_debit += line.debit
            row.opening_credit += line.credit

    result = [apply_closing(row) for row in rows.values() if row.has_activity()]

    logger.debug(
        "balances_accumulated",
        accounts=len(rows),
        rows=len(result),
        skipped_lines=skipped,
    )
    return result

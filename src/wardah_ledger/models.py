"""Data structures for accounts, posted journal lines and trial balance rows.

Raw records from the backend come in two journal shapes. The current schema
stores lines in `gl_entry_lines` (``debit``/``credit``) under `gl_entries`;
older tenants still use `journal_lines` (``debit_amount``/``credit_amount``)
under `journal_entries`. Both are parsed into their own record type and
normalized to :class:`PostedLine` at the fetch boundary, so computation never
sees untyped dictionaries.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Literal

ZERO = Decimal("0")

Language = Literal["ar", "en"]

AMOUNT_FIELDS = (
    "opening_debit",
    "opening_credit",
    "period_debit",
    "period_credit",
    "closing_debit",
    "closing_credit",
)


class AccountType(str, Enum):
    """Top-level classification of a chart-of-accounts entry."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


def to_decimal(value: Any) -> Decimal:
    """Parse an amount as returned by PostgREST (number, string or null)."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (TypeError, ValueError, InvalidOperation):
        return ZERO


def parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    # datetime is a date subclass; YAML loads unquoted timestamps as datetime
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        return None


def _account_type(value: Any) -> str:
    return str(value or "").strip().lower()


@dataclass(frozen=True)
class Account:
    """A postable chart-of-accounts entry."""

    id: str
    code: str
    name: str
    account_type: str
    name_ar: str | None = None
    allow_posting: bool = True
    is_active: bool = True

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Account":
        code = str(record.get("code") or record.get("account_code") or "")
        return cls(
            id=str(record.get("id") or code),
            code=code,
            name=str(record.get("name") or record.get("account_name") or code),
            name_ar=record.get("name_ar") or record.get("account_name_ar"),
            account_type=_account_type(record.get("account_type")),
            allow_posting=bool(record.get("allow_posting", True)),
            is_active=bool(record.get("is_active", True)),
        )


@dataclass(frozen=True)
class PostedLine:
    """A posted journal line reduced to what the accumulator needs."""

    account_id: str
    debit: Decimal
    credit: Decimal
    effective_date: date | None


def _effective_date(posting_date: Any, entry_date: Any) -> date | None:
    return parse_date(posting_date) or parse_date(entry_date)


@dataclass(frozen=True)
class ModernLineRecord:
    """Line from `gl_entry_lines` joined to its `gl_entries` parent."""

    account_id: str
    debit: Decimal
    credit: Decimal
    entry_date: date | None
    posting_date: date | None

    @classmethod
    def from_record(
        cls, record: dict[str, Any], parent_key: str = "gl_entries"
    ) -> "ModernLineRecord":
        parent = _parent(record, parent_key)
        return cls(
            account_id=str(record.get("account_id") or ""),
            debit=to_decimal(record.get("debit")),
            credit=to_decimal(record.get("credit")),
            entry_date=parse_date(parent.get("entry_date")),
            posting_date=parse_date(parent.get("posting_date")),
        )

    def to_posted_line(self) -> PostedLine:
        return PostedLine(
            account_id=self.account_id,
            debit=self.debit,
            credit=self.credit,
            effective_date=_effective_date(self.posting_date, self.entry_date),
        )


@dataclass(frozen=True)
class LegacyLineRecord:
    """Line from `journal_lines` joined to its `journal_entries` parent."""

    account_id: str
    debit_amount: Decimal
    credit_amount: Decimal
    entry_date: date | None
    posting_date: date | None

    @classmethod
    def from_record(
        cls, record: dict[str, Any], parent_key: str = "journal_entries"
    ) -> "LegacyLineRecord":
        parent = _parent(record, parent_key)
        return cls(
            account_id=str(record.get("account_id") or ""),
            debit_amount=to_decimal(record.get("debit_amount")),
            credit_amount=to_decimal(record.get("credit_amount")),
            entry_date=parse_date(parent.get("entry_date")),
            posting_date=parse_date(parent.get("posting_date")),
        )

    def to_posted_line(self) -> PostedLine:
        return PostedLine(
            account_id=self.account_id,
            debit=self.debit_amount,
            credit=self.credit_amount,
            effective_date=_effective_date(self.posting_date, self.entry_date),
        )


LineRecord = ModernLineRecord | LegacyLineRecord


def _parent(record: dict[str, Any], parent_key: str) -> dict[str, Any]:
    """Return the embedded parent entry, falling back to the record itself.

    PostgREST embeds a to-one parent as an object; flattened exports carry
    the dates on the line.
    """
    parent = record.get(parent_key)
    if isinstance(parent, list):
        parent = parent[0] if parent else None
    if isinstance(parent, dict):
        return parent
    return record


@dataclass
class TrialBalanceRow:
    """One account line of the trial balance (derived, never persisted)."""

    account_code: str
    account_name: str
    account_type: str
    account_name_ar: str | None = None
    opening_debit: Decimal = ZERO
    opening_credit: Decimal = ZERO
    period_debit: Decimal = ZERO
    period_credit: Decimal = ZERO
    closing_debit: Decimal = ZERO
    closing_credit: Decimal = ZERO

    @classmethod
    def from_account(cls, account: Account) -> "TrialBalanceRow":
        return cls(
            account_code=account.code,
            account_name=account.name,
            account_name_ar=account.name_ar,
            account_type=account.account_type,
        )

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "TrialBalanceRow":
        """Build a row from an RPC or view result already in row shape."""
        code = str(data.get("account_code") or data.get("code") or "")
        return cls(
            account_code=code,
            account_name=str(data.get("account_name") or data.get("name") or code),
            account_name_ar=data.get("account_name_ar") or data.get("name_ar"),
            account_type=_account_type(data.get("account_type")),
            **{name: to_decimal(data.get(name)) for name in AMOUNT_FIELDS},
        )

    def display_name(self, language: Language) -> str:
        if language == "ar":
            return self.account_name_ar or self.account_name
        return self.account_name

    def has_activity(self) -> bool:
        return any(
            amount != ZERO
            for amount in (
                self.opening_debit,
                self.opening_credit,
                self.period_debit,
                self.period_credit,
            )
        )

    def amounts(self) -> tuple[Decimal, ...]:
        return tuple(getattr(self, name) for name in AMOUNT_FIELDS)


@dataclass(frozen=True)
class TrialBalanceTotals:
    """Column sums of a set of trial balance rows."""

    opening_debit: Decimal = ZERO
    opening_credit: Decimal = ZERO
    period_debit: Decimal = ZERO
    period_credit: Decimal = ZERO
    closing_debit: Decimal = ZERO
    closing_credit: Decimal = ZERO

    def amounts(self) -> tuple[Decimal, ...]:
        return tuple(getattr(self, name) for name in AMOUNT_FIELDS)

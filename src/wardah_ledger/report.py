"""Trial balance report: loading, filtering, totals and export."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from wardah_ledger.clients.supabase import SupabaseClient
from wardah_ledger.models import Language, TrialBalanceRow, TrialBalanceTotals
from wardah_ledger.resolver import EmptyResultPolicy, Tier, TrialBalanceResolver
from wardah_ledger.session import TenantSession
from wardah_ledger.totals import (
    ALL_TYPES,
    calculate_totals,
    differences,
    filter_balances_by_type,
    is_balanced,
)

if TYPE_CHECKING:
    from wardah_ledger.exports import ExportFormat

logger = structlog.get_logger(__name__)


def default_period(today: date | None = None) -> tuple[date, date]:
    """Default report window: 1 January of the current year through today."""
    today = today or date.today()
    return date(today.year, 1, 1), today


@dataclass
class TrialBalanceReport:
    """A computed trial balance for one window."""

    rows: list[TrialBalanceRow]
    from_date: date
    as_of_date: date
    source: Tier | None = None
    alert: str | None = None

    def filtered(self, account_type: str = ALL_TYPES) -> "TrialBalanceReport":
        return TrialBalanceReport(
            rows=filter_balances_by_type(self.rows, account_type),
            from_date=self.from_date,
            as_of_date=self.as_of_date,
            source=self.source,
            alert=self.alert,
        )

    @property
    def totals(self) -> TrialBalanceTotals:
        return calculate_totals(self.rows)

    @property
    def is_balanced(self) -> bool:
        return is_balanced(self.totals)

    @property
    def differences(self) -> dict[str, Decimal]:
        return differences(self.totals)

    def export(
        self,
        fmt: "ExportFormat",
        language: Language = "ar",
        directory: Path | str = ".",
    ) -> Path:
        # openpyxl and reportlab load only when a file is written
        from wardah_ledger.exports import export_report

        return export_report(
            fmt,
            self.rows,
            self.totals,
            self.from_date,
            self.as_of_date,
            language,
            directory,
        )


class TrialBalanceService:
    """Loads trial balance reports for a tenant."""

    def __init__(
        self,
        client: SupabaseClient,
        session: TenantSession,
        empty_service_result: EmptyResultPolicy | str | None = None,
        language: Language | None = None,
    ):
        self.resolver = TrialBalanceResolver(
            client,
            session,
            empty_service_result=empty_service_result,
            language=language,
        )

    async def load(
        self, from_date: date | None = None, as_of_date: date | None = None
    ) -> TrialBalanceReport:
        default_from, default_as_of = default_period(as_of_date)
        from_date = from_date or default_from
        as_of_date = as_of_date or default_as_of

        resolution = await self.resolver.resolve(from_date, as_of_date)
        return TrialBalanceReport(
            rows=resolution.rows,
            from_date=from_date,
            as_of_date=as_of_date,
            source=resolution.source,
            alert=resolution.alert,
        )

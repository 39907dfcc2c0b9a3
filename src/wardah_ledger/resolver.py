"""Trial balance resolution across three sources, cheapest first.

1. ``precomputed``: the aggregation view maintained by the database.
2. ``rpc``: the ``rpc_get_trial_balance`` stored function.
3. ``manual``: postable accounts and posted lines folded locally by the
   balance accumulator.

Each tier is an attempt function returning a :class:`TierOutcome`; the
runner stops at the first success. Tiers run once each, in order, awaited
one after another. Nothing is retried.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

import structlog

from wardah_ledger import labels
from wardah_ledger.accumulator import accumulate_balances
from wardah_ledger.clients.supabase import SupabaseClient
from wardah_ledger.config import get_settings
from wardah_ledger.models import Language, TrialBalanceRow
from wardah_ledger.session import TenantSession
from wardah_ledger.sources import (
    fetch_postable_accounts,
    fetch_posted_lines,
    fetch_precomputed_rows,
    fetch_rpc_rows,
)

logger = structlog.get_logger(__name__)


class Tier(str, Enum):
    """Source a trial balance was produced from."""

    PRECOMPUTED = "precomputed"
    RPC = "rpc"
    MANUAL = "manual"


class EmptyResultPolicy(str, Enum):
    """How an empty answer from the precomputed view is interpreted.

    ``failure`` assumes the view is broken and moves on to the next tier;
    ``no_data`` accepts it as a tenant with no movement.
    """

    FAILURE = "failure"
    NO_DATA = "no_data"


@dataclass(frozen=True)
class TierOutcome:
    """Result of a single tier attempt: rows on success, an error otherwise."""

    tier: Tier
    rows: list[TrialBalanceRow] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.rows is not None

    @classmethod
    def succeeded(cls, tier: Tier, rows: list[TrialBalanceRow]) -> "TierOutcome":
        return cls(tier=tier, rows=rows)

    @classmethod
    def failed(cls, tier: Tier, error: str) -> "TierOutcome":
        return cls(tier=tier, error=error)


@dataclass
class Resolution:
    """Final answer of a resolution run."""

    rows: list[TrialBalanceRow]
    source: Tier | None
    outcomes: list[TierOutcome] = field(default_factory=list)
    alert: str | None = None

    @property
    def attempted(self) -> list[Tier]:
        return [outcome.tier for outcome in self.outcomes]


Attempt = Callable[[date, date], Awaitable[TierOutcome]]


class TrialBalanceResolver:
    """Produces a trial balance for a date window from the best available source."""

    def __init__(
        self,
        client: SupabaseClient,
        session: TenantSession,
        empty_service_result: EmptyResultPolicy | str | None = None,
        language: Language | None = None,
    ):
        settings = get_settings()
        self.client = client
        self.session = session
        self.empty_service_result = EmptyResultPolicy(
            empty_service_result or settings.empty_service_result
        )
        self.language: Language = language or settings.report_language

    def attempts(self) -> list[Attempt]:
        """Attempt functions in the order they are tried."""
        return [self._try_precomputed, self._try_rpc, self._try_manual]

    async def _try_precomputed(self, from_date: date, as_of_date: date) -> TierOutcome:
        try:
            rows = await fetch_precomputed_rows(self.client, self.session)
        except Exception as e:
            return TierOutcome.failed(Tier.PRECOMPUTED, str(e))

        if not rows and self.empty_service_result is EmptyResultPolicy.FAILURE:
            return TierOutcome.failed(Tier.PRECOMPUTED, "empty result")
        return TierOutcome.succeeded(Tier.PRECOMPUTED, rows)

    async def _try_rpc(self, from_date: date, as_of_date: date) -> TierOutcome:
        try:
            rows = await fetch_rpc_rows(self.client, self.session, as_of_date)
        except Exception as e:
            return TierOutcome.failed(Tier.RPC, str(e))
        return TierOutcome.succeeded(Tier.RPC, rows)

    async def _try_manual(self, from_date: date, as_of_date: date) -> TierOutcome:
        try:
            accounts = await fetch_postable_accounts(self.client, self.session)
            lines = await fetch_posted_lines(self.client, self.session)
        except Exception as e:
            return TierOutcome.failed(Tier.MANUAL, str(e))

        rows = accumulate_balances(accounts, lines, from_date, as_of_date)
        logger.info(
            "manual_trial_balance_computed",
            accounts=len(accounts),
            lines=len(lines),
            rows=len(rows),
        )
        return TierOutcome.succeeded(Tier.MANUAL, rows)

    async def resolve(self, from_date: date, as_of_date: date) -> Resolution:
        """Run the tiers in order and return the first successful result.

        Raises:
            ValueError: If ``from_date`` is after ``as_of_date``.
            NoActiveTenantError: If the session has no tenant.
        """
        if from_date > as_of_date:
            raise ValueError(f"from_date {from_date} is after as_of_date {as_of_date}")
        tenant_id = self.session.tenant_id

        log = logger.bind(
            org_id=tenant_id,
            from_date=from_date.isoformat(),
            as_of_date=as_of_date.isoformat(),
        )

        outcomes: list[TierOutcome] = []
        for attempt in self.attempts():
            outcome = await attempt(from_date, as_of_date)
            outcomes.append(outcome)

            if outcome.ok:
                rows = outcome.rows or []
                log.info("trial_balance_resolved", tier=outcome.tier.value, count=len(rows))
                return Resolution(rows=rows, source=outcome.tier, outcomes=outcomes)

            log.warning("trial_balance_tier_failed", tier=outcome.tier.value, error=outcome.error)

        # The manual tier is the last resort; its failure is the only one users see
        log.error("trial_balance_unavailable", attempted=[o.tier.value for o in outcomes])
        return Resolution(
            rows=[],
            source=None,
            outcomes=outcomes,
            alert=labels.LOAD_FAILED[self.language],
        )

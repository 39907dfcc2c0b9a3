"""Wardah Ledger - trial balance engine for the Wardah multi-tenant ERP."""

__version__ = "0.1.0"

from wardah_ledger.accumulator import accumulate_balances, net_closing
from wardah_ledger.clients import RelationshipError, SupabaseClient, SupabaseError
from wardah_ledger.config import configure_logging, get_settings
from wardah_ledger.models import (
    Account,
    AccountType,
    PostedLine,
    TrialBalanceRow,
    TrialBalanceTotals,
)
from wardah_ledger.report import TrialBalanceReport, TrialBalanceService, default_period
from wardah_ledger.resolver import (
    EmptyResultPolicy,
    Resolution,
    Tier,
    TierOutcome,
    TrialBalanceResolver,
)
from wardah_ledger.session import NoActiveTenantError, TenantSession
from wardah_ledger.totals import (
    calculate_totals,
    filter_balances_by_type,
    is_balanced,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "Account",
    "AccountType",
    "PostedLine",
    "TrialBalanceRow",
    "TrialBalanceTotals",
    # Computation
    "accumulate_balances",
    "net_closing",
    "calculate_totals",
    "filter_balances_by_type",
    "is_balanced",
    # Resolution
    "TrialBalanceResolver",
    "Resolution",
    "Tier",
    "TierOutcome",
    "EmptyResultPolicy",
    # Report
    "TrialBalanceService",
    "TrialBalanceReport",
    "default_period",
    # Backend & session
    "SupabaseClient",
    "SupabaseError",
    "RelationshipError",
    "TenantSession",
    "NoActiveTenantError",
    # Config
    "get_settings",
    "configure_logging",
]

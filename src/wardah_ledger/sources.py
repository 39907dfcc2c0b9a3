"""Remote data sources for the trial balance.

Each function runs its query once, reading every page of it, and raises
:class:`~wardah_ledger.clients.supabase.SupabaseError` on failure, except
:func:`fetch_posted_lines`, which falls back from the current journal
schema to the legacy one by itself.
"""

from datetime import date
from typing import Any

import structlog

from wardah_ledger.accumulator import apply_closing
from wardah_ledger.clients.supabase import SupabaseClient, SupabaseError
from wardah_ledger.config import get_settings
from wardah_ledger.models import (
    Account,
    LegacyLineRecord,
    LineRecord,
    ModernLineRecord,
    PostedLine,
    TrialBalanceRow,
    to_decimal,
)
from wardah_ledger.session import TenantSession

logger = structlog.get_logger(__name__)

MODERN_LINES_TABLE = "gl_entry_lines"
MODERN_ENTRIES_TABLE = "gl_entries"
MODERN_POSTED_STATUS = "POSTED"

LEGACY_LINES_TABLE = "journal_lines"
LEGACY_ENTRIES_TABLE = "journal_entries"
LEGACY_POSTED_STATUS = "posted"

_PARENT_COLUMNS = "entry_date,posting_date,status,org_id"


async def _fetch_all(
    client: SupabaseClient,
    table: str,
    columns: str,
    filters: dict[str, str],
    order: str,
    page_size: int | None = None,
) -> list[dict[str, Any]]:
    """Page through a query until a short page comes back.

    PostgREST caps every response at the server's ``max_rows``; ``order``
    must be a total order so pages neither overlap nor skip rows.
    """
    page_size = page_size or get_settings().supabase_page_size
    records: list[dict[str, Any]] = []
    offset = 0
    while True:
        batch = await client.select(
            table,
            columns=columns,
            filters=filters,
            order=order,
            limit=page_size,
            offset=offset,
        )
        if not batch:
            break
        records.extend(batch)
        if len(batch) < page_size:
            break
        offset += page_size
    logger.debug("query_paged", table=table, count=len(records))
    return records


async def fetch_postable_accounts(
    client: SupabaseClient, session: TenantSession
) -> list[Account]:
    """Active accounts that accept postings, ordered by code."""
    records = await _fetch_all(
        client,
        "gl_accounts",
        columns="id,code,name,name_ar,account_type,allow_posting,is_active",
        filters={
            "org_id": f"eq.{session.tenant_id}",
            "allow_posting": "eq.true",
            "is_active": "eq.true",
        },
        order="code.asc,id.asc",
    )
    accounts = [Account.from_record(record) for record in records]
    logger.info("accounts_fetched", count=len(accounts))
    return accounts


async def _fetch_modern_lines(
    client: SupabaseClient, session: TenantSession
) -> list[LineRecord]:
    records = await _fetch_all(
        client,
        MODERN_LINES_TABLE,
        columns=f"account_id,debit,credit,{MODERN_ENTRIES_TABLE}!inner({_PARENT_COLUMNS})",
        filters={
            f"{MODERN_ENTRIES_TABLE}.status": f"eq.{MODERN_POSTED_STATUS}",
            f"{MODERN_ENTRIES_TABLE}.org_id": f"eq.{session.tenant_id}",
        },
        order="id.asc",
    )
    return [ModernLineRecord.from_record(record, MODERN_ENTRIES_TABLE) for record in records]


async def _fetch_legacy_lines(
    client: SupabaseClient, session: TenantSession
) -> list[LineRecord]:
    records = await _fetch_all(
        client,
        LEGACY_LINES_TABLE,
        columns=(
            f"account_id,debit_amount,credit_amount,"
            f"{LEGACY_ENTRIES_TABLE}!inner({_PARENT_COLUMNS})"
        ),
        filters={
            f"{LEGACY_ENTRIES_TABLE}.status": f"eq.{LEGACY_POSTED_STATUS}",
            f"{LEGACY_ENTRIES_TABLE}.org_id": f"eq.{session.tenant_id}",
        },
        order="id.asc",
    )
    return [LegacyLineRecord.from_record(record, LEGACY_ENTRIES_TABLE) for record in records]


async def fetch_posted_lines(
    client: SupabaseClient, session: TenantSession
) -> list[PostedLine]:
    """Posted journal lines with their parent entry's dates.

    Tries the ``gl_entry_lines``/``gl_entries`` join first. If that query
    fails (typically because the relationship does not exist on an older
    database) the ``journal_lines``/``journal_entries`` shape is used instead.
    """
    try:
        records = await _fetch_modern_lines(client, session)
        shape = "modern"
    except SupabaseError as e:
        logger.warning(
            "modern_lines_query_failed",
            error=str(e),
            code=e.code,
            fallback=LEGACY_LINES_TABLE,
        )
        records = await _fetch_legacy_lines(client, session)
        shape = "legacy"

    lines = [record.to_posted_line() for record in records]
    logger.info("posted_lines_fetched", shape=shape, count=len(lines))
    return lines


def row_from_view(data: dict[str, Any]) -> TrialBalanceRow:
    """Parse a precomputed view row.

    Rows already in trial balance shape are taken as they are. Rows that only
    carry ``total_debit``/``total_credit`` report them as period movement with
    netted closing columns.
    """
    if "total_debit" in data or "total_credit" in data:
        row = TrialBalanceRow.from_mapping(
            {
                **data,
                "period_debit": to_decimal(data.get("total_debit")),
                "period_credit": to_decimal(data.get("total_credit")),
            }
        )
        return apply_closing(row)
    return TrialBalanceRow.from_mapping(data)


async def fetch_precomputed_rows(
    client: SupabaseClient,
    session: TenantSession,
    view: str | None = None,
) -> list[TrialBalanceRow]:
    """Trial balance rows from the precomputed aggregation view."""
    view = view or get_settings().trial_balance_view
    records = await client.select(view, filters={"org_id": f"eq.{session.tenant_id}"})
    rows = [row_from_view(record) for record in records]
    rows.sort(key=lambda row: row.account_code)
    return rows


async def fetch_rpc_rows(
    client: SupabaseClient,
    session: TenantSession,
    as_of_date: date,
    function: str | None = None,
) -> list[TrialBalanceRow]:
    """Trial balance rows from the server-side stored function, used as-is."""
    function = function or get_settings().trial_balance_rpc
    result = await client.rpc(
        function,
        {"p_tenant": session.tenant_id, "p_as_of_date": as_of_date.isoformat()},
    )
    if result is None:
        return []
    if not isinstance(result, list):
        raise SupabaseError(f"Unexpected {function} response: {type(result).__name__}")
    return [TrialBalanceRow.from_mapping(item) for item in result if isinstance(item, dict)]

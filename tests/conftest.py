"""Pytest configuration and fixtures."""

import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Set test environment variables before importing settings
os.environ.setdefault("SUPABASE_URL", "https://wardah.supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key-test")
os.environ.setdefault("WARDAH_ORG_ID", "00000000-0000-0000-0000-00000000000a")

from wardah_ledger.clients.supabase import SupabaseError  # noqa: E402
from wardah_ledger.models import Account  # noqa: E402
from wardah_ledger.session import TenantSession  # noqa: E402

ORG_ID = "00000000-0000-0000-0000-00000000000a"
FROM_DATE = date(2024, 1, 1)
AS_OF_DATE = date(2024, 12, 31)


@dataclass
class FakeSupabase:
    """In-memory stand-in for SupabaseClient.

    ``tables`` maps a table or view name to the rows it returns, ``errors``
    maps a table name or ``rpc:<function>`` to an exception to raise.
    """

    tables: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    rpc_results: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, Exception] = field(default_factory=dict)
    calls: list[tuple[str, str, dict[str, Any]]] = field(default_factory=list)

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        self.calls.append(
            (
                "select",
                table,
                {
                    "columns": columns,
                    "filters": filters or {},
                    "order": order,
                    "limit": limit,
                    "offset": offset,
                },
            )
        )
        if table in self.errors:
            raise self.errors[table]
        rows = self.tables.get(table, [])
        start = offset or 0
        end = start + limit if limit is not None else None
        return list(rows[start:end])

    async def rpc(self, function: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append(("rpc", function, params or {}))
        key = f"rpc:{function}"
        if key in self.errors:
            raise self.errors[key]
        return self.rpc_results.get(function, [])

    @property
    def touched(self) -> list[str]:
        return [name for _, name, _ in self.calls]


@pytest.fixture
def session():
    """A session initialized for the test organization."""
    return TenantSession(ORG_ID)


@pytest.fixture
def sample_accounts():
    """Cash, Accounts Payable and Sales, ordered by code."""
    return [
        Account(id="acc-1001", code="1001", name="Cash", name_ar="النقدية", account_type="asset"),
        Account(
            id="acc-2001",
            code="2001",
            name="Accounts Payable",
            name_ar="الدائنون",
            account_type="liability",
        ),
        Account(id="acc-4001", code="4001", name="Sales", name_ar="المبيعات", account_type="revenue"),
    ]


@pytest.fixture
def gl_account_records(sample_accounts):
    """`gl_accounts` rows as PostgREST returns them."""
    return [
        {
            "id": account.id,
            "code": account.code,
            "name": account.name,
            "name_ar": account.name_ar,
            "account_type": account.account_type,
            "allow_posting": True,
            "is_active": True,
        }
        for account in sample_accounts
    ]


def _modern(
    account_id: str, debit: str, credit: str, entry_date: str, posting_date: str | None = None
):
    return {
        "account_id": account_id,
        "debit": debit,
        "credit": credit,
        "gl_entries": {
            "entry_date": entry_date,
            "posting_date": posting_date,
            "status": "POSTED",
            "org_id": ORG_ID,
        },
    }


@pytest.fixture
def modern_line_records():
    """Opening lines in 2023 and period lines in 2024 for the sample accounts."""
    return [
        _modern("acc-1001", "1000.00", "0", "2023-12-15"),
        _modern("acc-2001", "0", "500.00", "2023-11-30"),
        _modern("acc-4001", "0", "2000.00", "2023-12-31"),
        _modern("acc-1001", "500.00", "0", "2024-03-01"),
        _modern("acc-1001", "0", "200.00", "2024-04-10"),
        _modern("acc-2001", "100.00", "0", "2024-05-05"),
        _modern("acc-2001", "0", "300.00", "2024-06-20"),
        _modern("acc-4001", "0", "1000.00", "2024-07-01"),
    ]


@pytest.fixture
def fake_supabase_error():
    return SupabaseError("boom", status_code=500)


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx AsyncClient."""
    client = AsyncMock()
    client.request = AsyncMock()
    client.aclose = AsyncMock()
    return client

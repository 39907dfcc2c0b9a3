"""Explicit tenant (organization) context for tenant-scoped queries."""

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from wardah_ledger.clients.supabase import SupabaseClient

logger = structlog.get_logger(__name__)


class NoActiveTenantError(Exception):
    """A tenant-scoped operation ran without an initialized session."""

    pass


class TenantSession:
    """Holds the organization every query is scoped to.

    A session starts empty; call :meth:`init` (or
    :meth:`init_from_membership`) before use and :meth:`clear` when the
    user switches organization or signs out.
    """

    def __init__(self, org_id: str | None = None):
        self._org_id: str | None = None
        if org_id:
            self.init(org_id)

    def init(self, org_id: str) -> None:
        """Activate the session for ``org_id``."""
        org_id = (org_id or "").strip()
        if not org_id:
            raise ValueError("org_id must be a non-empty string")
        self._org_id = org_id
        logger.info("tenant_session_initialized", org_id=org_id)

    async def init_from_membership(self, client: "SupabaseClient", user_id: str) -> str:
        """Resolve the user's active organization and activate it."""
        rows = await client.select(
            "user_organizations",
            columns="org_id",
            filters={"user_id": f"eq.{user_id}", "is_active": "eq.true"},
            limit=1,
        )
        if not rows or not rows[0].get("org_id"):
            raise NoActiveTenantError(f"No active organization for user {user_id}")
        org_id = str(rows[0]["org_id"])
        self.init(org_id)
        return org_id

    def clear(self) -> None:
        """Drop the active organization."""
        if self._org_id:
            logger.info("tenant_session_cleared", org_id=self._org_id)
        self._org_id = None

    @property
    def is_active(self) -> bool:
        return self._org_id is not None

    @property
    def tenant_id(self) -> str:
        """Get the active organization ID."""
        if self._org_id is None:
            raise NoActiveTenantError("Tenant session is not initialized")
        return self._org_id

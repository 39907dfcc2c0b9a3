"""Backend clients for Wardah Ledger."""

from wardah_ledger.clients.supabase import (
    RelationshipError,
    SupabaseClient,
    SupabaseError,
)

__all__ = ["SupabaseClient", "SupabaseError", "RelationshipError"]

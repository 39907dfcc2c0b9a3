"""Async PostgREST client for the Supabase backend (table selects and RPC calls)."""

from typing import Any

import httpx
import structlog

from wardah_ledger.config import get_settings

logger = structlog.get_logger(__name__)

# PostgREST codes for a missing or ambiguous embedded relationship
RELATIONSHIP_ERROR_CODES = ("PGRST200", "PGRST201")


class SupabaseError(Exception):
    """Base exception for Supabase REST/RPC errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.details = details


class RelationshipError(SupabaseError):
    """The requested join between two tables does not exist."""

    pass


class SupabaseClient:
    """Async client for the Supabase REST API.

    Every call is attempted exactly once; callers decide what a failure means.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        schema: str | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        base_url = base_url or settings.supabase_url
        if api_key is None and settings.supabase_anon_key is not None:
            api_key = settings.supabase_anon_key.get_secret_value()
        if not base_url or not api_key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_ANON_KEY must be configured")
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        if access_token is None and settings.supabase_access_token is not None:
            access_token = settings.supabase_access_token.get_secret_value()
        self._access_token = access_token
        self._schema = schema or settings.supabase_schema
        self._timeout = timeout or settings.supabase_timeout

        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self._timeout),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SupabaseClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        """Get request headers with API key and bearer token."""
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Accept-Profile": self._schema,
            "Content-Profile": self._schema,
        }

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make a single REST request and decode the JSON body."""
        client = await self._get_client()

        try:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                headers=self._get_headers(),
            )
        except httpx.RequestError as e:
            raise SupabaseError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            try:
                error_detail = response.json() if response.content else {}
            except ValueError:
                error_detail = {
                    "raw": response.text[:500] if response.text else "empty response"
                }
            if not isinstance(error_detail, dict):
                error_detail = {"raw": error_detail}

            code = error_detail.get("code")
            message = error_detail.get("message") or f"API error: {response.status_code}"
            error_cls = (
                RelationshipError if code in RELATIONSHIP_ERROR_CODES else SupabaseError
            )
            raise error_cls(
                message,
                status_code=response.status_code,
                code=code,
                details=error_detail,
            )

        return response.json() if response.content else None

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, str] | None = None,
        order: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        """Select rows from a table or view.

        Args:
            table: Table or view name.
            columns: PostgREST select list, may embed related tables.
            filters: Column (or ``parent.column``) to operator expression,
                e.g. ``{"status": "eq.POSTED"}``.
            order: Order clause, e.g. ``"code.asc"``.
            limit: Maximum number of rows.
            offset: Number of rows to skip.
        """
        params: dict[str, Any] = {"select": columns}
        if filters:
            params.update(filters)
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit
        if offset:
            params["offset"] = offset

        result = await self._request("GET", f"/rest/v1/{table}", params=params)
        rows = result if isinstance(result, list) else []
        logger.debug("supabase_select", table=table, count=len(rows))
        return rows

    async def rpc(self, function: str, params: dict[str, Any] | None = None) -> Any:
        """Call a Postgres function exposed through PostgREST."""
        result = await self._request("POST", f"/rest/v1/rpc/{function}", json=params or {})
        logger.debug("supabase_rpc", function=function)
        return result

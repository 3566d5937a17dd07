"""Read-only access to the CMS tables, always scoped to one tenant."""

import logging
from typing import Any, List, Optional

from psycopg2.pool import ThreadedConnectionPool

from sitecontent.config import DEFAULT_SLOW_QUERY_MS
from sitecontent.db import connection, fetch_all, fetch_one
from sitecontent.models.page import PageRecord, PageSummary
from sitecontent.services.tenant import TenantScope

logger = logging.getLogger(__name__)

_PAGE_COLUMNS = "id, tenant_id, page_name, slug, meta_title, meta_description, meta_keywords"

# Slugs are meant to be unique per tenant but legacy databases may hold
# duplicates; the most recently updated row wins.
_TIE_BREAK = "ORDER BY updated_at DESC NULLS LAST, id DESC LIMIT 1"


class PostgresPageRepository:
    def __init__(self, pool: ThreadedConnectionPool, slow_query_ms: float = DEFAULT_SLOW_QUERY_MS) -> None:
        self._pool = pool
        self._slow_ms = slow_query_ms

    def find_page_by_name(self, tenant: TenantScope, page_name: str) -> Optional[PageRecord]:
        sql = f"SELECT {_PAGE_COLUMNS} FROM pages WHERE tenant_id = %s AND page_name = %s {_TIE_BREAK}"
        with connection(self._pool) as conn:
            row = fetch_one(conn, sql, [tenant.tenant_id, page_name], query_name="page_by_name", slow_ms=self._slow_ms)
        return PageRecord(**row) if row else None

    def find_page_by_slug(self, tenant: TenantScope, slug: str) -> Optional[PageRecord]:
        sql = f"SELECT {_PAGE_COLUMNS} FROM pages WHERE tenant_id = %s AND slug = %s {_TIE_BREAK}"
        with connection(self._pool) as conn:
            row = fetch_one(conn, sql, [tenant.tenant_id, slug], query_name="page_by_slug", slow_ms=self._slow_ms)
        return PageRecord(**row) if row else None

    def find_layout(self, page_id: Any) -> Optional[dict]:
        """Return the ``page_layouts`` row for *page_id*, or *None* if absent."""
        with connection(self._pool) as conn:
            return fetch_one(
                conn,
                "SELECT layout_json FROM page_layouts WHERE page_id = %s",
                [page_id],
                query_name="layout_by_page",
                slow_ms=self._slow_ms,
            )

    def list_pages(self, tenant: TenantScope) -> List[PageSummary]:
        with connection(self._pool) as conn:
            rows = fetch_all(
                conn,
                "SELECT id, page_name, slug FROM pages WHERE tenant_id = %s ORDER BY slug, id",
                [tenant.tenant_id],
                query_name="pages_by_tenant",
                slow_ms=self._slow_ms,
            )
        return [PageSummary(**row) for row in rows]

    def find_site_schema(self, tenant: TenantScope, schema_key: str) -> Optional[dict]:
        """Return the ``site_schemas`` row for *schema_key*, or *None* if absent."""
        with connection(self._pool) as conn:
            return fetch_one(
                conn,
                "SELECT schema_value FROM site_schemas WHERE tenant_id = %s AND schema_key = %s",
                [tenant.tenant_id, schema_key],
                query_name="site_schema",
                slow_ms=self._slow_ms,
            )

    def ping(self) -> None:
        with connection(self._pool) as conn:
            fetch_one(conn, "SELECT 1 AS ok", query_name="ping", slow_ms=self._slow_ms)

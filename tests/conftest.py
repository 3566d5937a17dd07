"""Shared fixtures: an in-memory repository and a client wired to it."""

from typing import Any, List, Optional

import psycopg2
import pytest
from fastapi.testclient import TestClient

from sitecontent.config import Settings
from sitecontent.dependencies import limiter
from sitecontent.main import create_app
from sitecontent.models.page import PageRecord, PageSummary
from sitecontent.services.tenant import TenantScope

TENANT = "t1"


class InMemoryPageRepository:
    """Mirrors the queries of the Postgres repository over plain lists."""

    def __init__(self) -> None:
        self.pages: List[dict] = []
        self.layouts: dict = {}
        self.schemas: dict = {}
        self.failure: Optional[Exception] = None
        self.calls: List[tuple] = []

    def add_page(self, page_id: Any, tenant_id: str = TENANT, **fields: Any) -> None:
        self.pages.append({"id": page_id, "tenant_id": tenant_id, **fields})

    def _check(self) -> None:
        if self.failure is not None:
            raise self.failure

    def _first(self, tenant: TenantScope, key: str, value: str) -> Optional[PageRecord]:
        for row in self.pages:
            if row["tenant_id"] == tenant.tenant_id and row.get(key) == value:
                return PageRecord(**row)
        return None

    def find_page_by_name(self, tenant: TenantScope, page_name: str) -> Optional[PageRecord]:
        self._check()
        self.calls.append(("by_name", tenant.tenant_id, page_name))
        return self._first(tenant, "page_name", page_name)

    def find_page_by_slug(self, tenant: TenantScope, slug: str) -> Optional[PageRecord]:
        self._check()
        self.calls.append(("by_slug", tenant.tenant_id, slug))
        return self._first(tenant, "slug", slug)

    def find_layout(self, page_id: Any) -> Optional[dict]:
        self._check()
        if page_id not in self.layouts:
            return None
        return {"layout_json": self.layouts[page_id]}

    def list_pages(self, tenant: TenantScope) -> List[PageSummary]:
        self._check()
        rows = [r for r in self.pages if r["tenant_id"] == tenant.tenant_id]
        return [PageSummary(id=r["id"], page_name=r.get("page_name"), slug=r.get("slug")) for r in rows]

    def find_site_schema(self, tenant: TenantScope, schema_key: str) -> Optional[dict]:
        self._check()
        key = (tenant.tenant_id, schema_key)
        if key not in self.schemas:
            return None
        return {"schema_value": self.schemas[key]}

    def ping(self) -> None:
        self._check()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Clear the slowapi in-memory counter before every test."""
    limiter._storage.reset()
    yield


@pytest.fixture
def repository() -> InMemoryPageRepository:
    return InMemoryPageRepository()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(tenant_id=TENANT, static_dir=str(tmp_path))


@pytest.fixture
def client(settings, repository) -> TestClient:
    return TestClient(create_app(settings, repository), raise_server_exceptions=False)


@pytest.fixture
def storage_down(repository) -> InMemoryPageRepository:
    repository.failure = psycopg2.OperationalError("could not connect to server")
    return repository

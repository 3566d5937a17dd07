"""Tenant scope shared by every content query."""

from dataclasses import dataclass

from sitecontent.config import Settings


@dataclass(frozen=True)
class TenantScope:
    tenant_id: str

    def __str__(self) -> str:
        return self.tenant_id


def resolve_tenant(settings: Settings) -> TenantScope:
    """Return the tenant this process serves, fixed for its lifetime."""
    return TenantScope(settings.tenant_id)

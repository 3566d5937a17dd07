"""FastAPI dependencies exposing the process-wide settings and repository."""

from fastapi import Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from sitecontent.config import Settings
from sitecontent.services.tenant import TenantScope, resolve_tenant

limiter = Limiter(key_func=get_remote_address)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request):
    return request.app.state.repository


def get_tenant(settings: Settings = Depends(get_settings)) -> TenantScope:
    return resolve_tenant(settings)

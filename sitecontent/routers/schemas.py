"""Tenant-wide site schemas (header and footer)."""

import logging
from typing import Any

import psycopg2
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sitecontent.dependencies import get_repository, get_tenant, limiter
from sitecontent.models.response import GlobalSchemaResponse
from sitecontent.routers.common import ERROR_RESPONSES, error_response
from sitecontent.services.layout import decode_json_text
from sitecontent.services.tenant import TenantScope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Site schema"])


def _schema_value(repository, tenant: TenantScope, schema_key: str) -> Any:
    row = repository.find_site_schema(tenant, schema_key)
    if row is None:
        return None
    return decode_json_text(row.get("schema_value"))


def _serve_schema(repository, tenant: TenantScope, schema_key: str) -> Any:
    try:
        value = _schema_value(repository, tenant, schema_key)
    except psycopg2.Error as exc:
        logger.exception("Storage error fetching %s schema for tenant %s", schema_key, tenant)
        return error_response(500, "Internal server error", details=str(exc))
    if value is None:
        return error_response(404, f"{schema_key.capitalize()} schema not found")
    return value


@router.get("/header", responses=ERROR_RESPONSES, summary="Get the header schema")
@limiter.limit("120/minute")
def header_schema(
    request: Request,
    tenant: TenantScope = Depends(get_tenant),
    repository=Depends(get_repository),
) -> Any:
    return _serve_schema(repository, tenant, "header")


@router.get("/footer", responses=ERROR_RESPONSES, summary="Get the footer schema")
@limiter.limit("120/minute")
def footer_schema(
    request: Request,
    tenant: TenantScope = Depends(get_tenant),
    repository=Depends(get_repository),
) -> Any:
    return _serve_schema(repository, tenant, "footer")


@router.get(
    "/global-schema",
    response_model=GlobalSchemaResponse,
    responses={500: ERROR_RESPONSES[500]},
    summary="Get the header and footer schemas together",
)
@limiter.limit("120/minute")
def global_schema(
    request: Request,
    tenant: TenantScope = Depends(get_tenant),
    repository=Depends(get_repository),
) -> GlobalSchemaResponse | JSONResponse:
    try:
        return GlobalSchemaResponse(
            header=_schema_value(repository, tenant, "header"),
            footer=_schema_value(repository, tenant, "footer"),
        )
    except psycopg2.Error as exc:
        logger.exception("Storage error fetching global schema for tenant %s", tenant)
        return error_response(500, "Internal server error", details=str(exc))

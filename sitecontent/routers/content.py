"""Page-content endpoints consumed by the single-page front end."""

import logging

import psycopg2
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sitecontent.config import Settings
from sitecontent.dependencies import get_repository, get_settings, get_tenant, limiter
from sitecontent.models.page import PageListResponse, PageResponse
from sitecontent.routers.common import ERROR_RESPONSES, error_response
from sitecontent.services.content import resolve_page_content
from sitecontent.services.errors import LayoutNotFound, PageNotFound
from sitecontent.services.locator import HOME_TOKEN
from sitecontent.services.tenant import TenantScope

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Content"])


@router.get(
    "/home-content",
    response_model=PageResponse,
    responses=ERROR_RESPONSES,
    summary="Get the home page content",
    description=(
        "Resolves the tenant's home page through its reserved page name "
        "(not its slug) and returns its metadata and normalised components."
    ),
)
@limiter.limit("120/minute")
def home_content(
    request: Request,
    settings: Settings = Depends(get_settings),
    tenant: TenantScope = Depends(get_tenant),
    repository=Depends(get_repository),
) -> PageResponse | JSONResponse:
    logger.info("Home content request received", extra={"tenant": str(tenant)})
    return _serve_page(
        repository,
        tenant,
        HOME_TOKEN,
        settings,
        page_missing="Home page not found",
        layout_missing="Home page layout not found",
    )


@router.get(
    "/page-content/{slug}",
    response_model=PageResponse,
    responses=ERROR_RESPONSES,
    summary="Get a page's content by slug",
    description="The slug `home` is served through the home-page lookup.",
)
@limiter.limit("120/minute")
def page_content(
    request: Request,
    slug: str,
    settings: Settings = Depends(get_settings),
    tenant: TenantScope = Depends(get_tenant),
    repository=Depends(get_repository),
) -> PageResponse | JSONResponse:
    logger.info("Page content request received", extra={"tenant": str(tenant), "slug": slug})
    return _serve_page(
        repository,
        tenant,
        slug,
        settings,
        page_missing="Page not found",
        layout_missing="Page layout not found",
    )


@router.get(
    "/pages",
    response_model=PageListResponse,
    responses={500: ERROR_RESPONSES[500]},
    summary="List the tenant's pages",
)
@limiter.limit("60/minute")
def list_pages(
    request: Request,
    tenant: TenantScope = Depends(get_tenant),
    repository=Depends(get_repository),
) -> PageListResponse | JSONResponse:
    try:
        pages = repository.list_pages(tenant)
    except psycopg2.Error as exc:
        logger.exception("Storage error listing pages for tenant %s", tenant)
        return error_response(500, "Internal server error", details=str(exc))
    return PageListResponse(pages=pages, total=len(pages))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _serve_page(
    repository,
    tenant: TenantScope,
    token: str,
    settings: Settings,
    *,
    page_missing: str,
    layout_missing: str,
) -> PageResponse | JSONResponse:
    """Run the resolution pipeline and map its failures to error bodies."""
    try:
        return resolve_page_content(
            repository,
            tenant,
            token,
            home_page_name=settings.home_page_name,
            home_fallback_slug=settings.home_fallback_slug,
        )
    except PageNotFound:
        logger.info("Page %r not found for tenant %s", token, tenant)
        return error_response(404, page_missing)
    except LayoutNotFound:
        logger.warning("Page %r of tenant %s has no layout", token, tenant)
        return error_response(404, layout_missing)
    except psycopg2.Error as exc:
        logger.exception("Storage error resolving page %r for tenant %s", token, tenant)
        return error_response(500, "Internal server error", details=str(exc))

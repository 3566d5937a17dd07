"""Page-content resolution: locate, load, normalise, assemble."""

import logging
from typing import Optional

from sitecontent.models.page import PageResponse
from sitecontent.services.assembler import assemble_page
from sitecontent.services.errors import PageNotFound
from sitecontent.services.layout import load_layout, normalize_layout
from sitecontent.services.locator import locate_page
from sitecontent.services.tenant import TenantScope

logger = logging.getLogger(__name__)


def resolve_page_content(
    repository,
    tenant: TenantScope,
    token: str,
    *,
    home_page_name: str,
    home_fallback_slug: Optional[str] = None,
) -> PageResponse:
    """Resolve *token* into the page response served to the front end.

    Raises:
        PageNotFound: if no page of *tenant* matches *token*.
        LayoutNotFound: if the page exists but has no stored layout.
    """
    page = locate_page(repository, token, tenant, home_page_name, home_fallback_slug)
    if page is None:
        raise PageNotFound(f"No page {token!r} for tenant {tenant}.")

    raw_layout = load_layout(repository, page.id)
    components = normalize_layout(raw_layout)
    logger.debug("Resolved page %s with %d components", page.id, len(components))
    return assemble_page(page, components, token)

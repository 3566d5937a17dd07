"""Page lookup by slug, with the reserved home-page path."""

import logging
from typing import Optional

from sitecontent.models.page import PageRecord
from sitecontent.services.tenant import TenantScope

logger = logging.getLogger(__name__)

HOME_TOKEN = "home"


def locate_page(
    repository,
    token: str,
    tenant: TenantScope,
    home_page_name: str,
    home_fallback_slug: Optional[str] = None,
) -> Optional[PageRecord]:
    """Find the page addressed by *token* within *tenant*.

    The token ``"home"`` is matched against the reserved page name, never
    against a literal ``home`` slug, because the stored home slug varies
    between sites.  When no page carries the reserved name and
    *home_fallback_slug* is set, that slug is tried instead.

    Returns *None* when nothing matches.
    """
    if token != HOME_TOKEN:
        return repository.find_page_by_slug(tenant, token)

    page = repository.find_page_by_name(tenant, home_page_name)
    if page is None and home_fallback_slug:
        logger.info(
            "Home page %r not found for tenant %s, trying slug %r",
            home_page_name,
            tenant,
            home_fallback_slug,
        )
        page = repository.find_page_by_slug(tenant, home_fallback_slug)
    return page

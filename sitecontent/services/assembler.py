from typing import Any, List

from sitecontent.models.page import PageMeta, PageRecord, PageResponse


def assemble_page(page: PageRecord, components: List[Any], requested_slug: str) -> PageResponse:
    """Merge page metadata with its normalised components.

    Empty stored values fall back to the requested slug and the page name;
    description and keywords are never null.
    """
    return PageResponse(
        slug=page.slug or requested_slug,
        meta=PageMeta(
            title=page.meta_title or page.page_name or "",
            description=page.meta_description or "",
            keywords=page.meta_keywords or "",
        ),
        components=components,
    )

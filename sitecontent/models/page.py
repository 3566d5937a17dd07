from typing import Any, List, Optional

from pydantic import BaseModel


class PageRecord(BaseModel):
    """One row of the ``pages`` table as read by the content pipeline."""

    id: Any
    tenant_id: str
    page_name: Optional[str] = None
    slug: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None


class PageMeta(BaseModel):
    title: str
    description: str
    keywords: str


class PageResponse(BaseModel):
    slug: str
    meta: PageMeta
    components: List[Any]


class PageSummary(BaseModel):
    id: Any
    page_name: Optional[str] = None
    slug: Optional[str] = None


class PageListResponse(BaseModel):
    pages: List[PageSummary]
    total: int

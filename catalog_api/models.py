"""Pydantic models for request/response payloads."""
from __future__ import annotations

import re

from pydantic import BaseModel, Field

from .config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_page_size(raw: str | int | None) -> int:
    """Read ``first`` the way browsers' ``parseInt`` does, then clamp it.

    Absent or non-numeric values fall back to the default page size.
    """
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT_RE.match(raw or "")
        if not match:
            return DEFAULT_PAGE_SIZE
        value = int(match.group(1))
    return max(1, min(value, MAX_PAGE_SIZE))


class SearchRequest(BaseModel):
    query: str = ""
    first: int = DEFAULT_PAGE_SIZE
    after: str | None = None

    @classmethod
    def from_params(
        cls, query: str | None, first: str | None, after: str | None
    ) -> "SearchRequest":
        return cls(query=query or "", first=parse_page_size(first), after=after or None)


class VariantSummary(BaseModel):
    id: str
    title: str
    sku: str | None = None
    availableQty: int


class CatalogItem(BaseModel):
    id: str
    title: str
    handle: str
    vendor: str
    isTopTagged: bool = False
    imageUrl: str | None = None
    variants: list[VariantSummary]


class PageInfo(BaseModel):
    hasNextPage: bool = False
    endCursor: str | None = None


class ProductsResponse(BaseModel):
    pageInfo: PageInfo
    count: int
    items: list[CatalogItem]


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "catalog-api"
    ts: str


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable failure description")

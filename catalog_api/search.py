"""Catalog search: provider query building and the request pipeline."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import List

from .config import Settings
from .filters import project_products
from .models import ProductsResponse, SearchRequest
from .shopify_client import ShopifyClient
from .utils import normalized_terms, sanitize_term, split_terms

logger = logging.getLogger(__name__)

STATUS_FILTER = "status:active"


def _term_clause(term: str) -> str:
    return f"(title:{term}* OR vendor:{term}* OR tag:{term}*)"


def build_product_query(text: str | None) -> str:
    """Translate free text into a Shopify product search expression.

    Each term becomes a prefix match over title, vendor and tags; all terms and
    the active-status filter are AND-ed. Shopify rejects quotes and most
    punctuation, so terms are reduced to ``[a-z0-9]`` first.
    """
    clauses: List[str] = []
    for term in split_terms(text):
        sanitized = sanitize_term(term)
        if sanitized:
            clauses.append(_term_clause(sanitized))
    if not clauses:
        return STATUS_FILTER
    clauses.append(STATUS_FILTER)
    query = " AND ".join(clauses)
    logger.debug("Shopify search filter=%r", query)
    return query


async def search_products(
    client: ShopifyClient, settings: Settings, request: SearchRequest
) -> ProductsResponse:
    """Run one catalog search against Shopify.

    ``pageInfo`` describes the upstream page before local filtering, so
    ``count`` can be smaller than ``first`` while ``hasNextPage`` is still
    true.
    """
    t0 = perf_counter()
    search_filter = build_product_query(request.query)
    terms = normalized_terms(request.query)
    t1 = perf_counter()
    connection = await client.fetch_products(search_filter, request.first, request.after)
    t2 = perf_counter()
    items = project_products(connection.nodes, terms, settings)
    t3 = perf_counter()

    logger.info(
        "timing: total=%.2fms build=%.2fms upstream=%.2fms post=%.2fms q=%r first=%s after=%r fetched=%s kept=%s",
        (t3 - t0) * 1000,
        (t1 - t0) * 1000,
        (t2 - t1) * 1000,
        (t3 - t2) * 1000,
        request.query,
        request.first,
        request.after,
        len(connection.nodes),
        len(items),
    )
    return ProductsResponse(pageInfo=connection.pageInfo, count=len(items), items=items)

"""Post-processing of Shopify products into catalog items.

Shopify's search only does per-field prefix matching, so results are
re-checked here against the full terms. The same pass removes the blocked
vendor, flags top-tagged products and keeps only variants with stock at the
configured location. Upstream ordering is preserved throughout.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .config import Settings
from .models import CatalogItem, VariantSummary
from .shopify_schema import ProviderProduct
from .utils import normalize_text

logger = logging.getLogger(__name__)


def is_blocked_vendor(product: ProviderProduct, blocked_vendor: str) -> bool:
    return normalize_text(product.vendor) == normalize_text(blocked_vendor)


def matches_terms(product: ProviderProduct, terms: Sequence[str]) -> bool:
    """Every term must appear in the title, the vendor, or one of the tags.

    ``terms`` are expected to be normalized already. Matching is substring
    based, so mid-word hits count.
    """
    if not terms:
        return True
    title = normalize_text(product.title)
    vendor = normalize_text(product.vendor)
    tags = [normalize_text(tag) for tag in product.tags]
    for term in terms:
        if term in title or term in vendor:
            continue
        if any(term in tag for tag in tags):
            continue
        return False
    return True


def is_top_tagged(product: ProviderProduct, top_tag: str) -> bool:
    wanted = normalize_text(top_tag)
    return any(normalize_text(tag) == wanted for tag in product.tags)


def in_stock_variants(product: ProviderProduct) -> List[VariantSummary]:
    variants = []
    for variant in product.variants.nodes:
        quantity = variant.available_quantity
        if quantity > 0:
            variants.append(
                VariantSummary(id=variant.id, title=variant.title, sku=variant.sku, availableQty=quantity)
            )
    return variants


def project_product(
    product: ProviderProduct, terms: Sequence[str], settings: Settings
) -> Optional[CatalogItem]:
    """Return the catalog item for ``product`` or ``None`` when it is dropped."""
    if is_blocked_vendor(product, settings.blocked_vendor):
        return None
    if not matches_terms(product, terms):
        return None
    variants = in_stock_variants(product)
    if not variants:
        return None
    return CatalogItem(
        id=product.id,
        title=product.title,
        handle=product.handle,
        vendor=product.vendor,
        isTopTagged=is_top_tagged(product, settings.top_tag),
        imageUrl=product.image_url,
        variants=variants,
    )


def project_products(
    products: Iterable[ProviderProduct], terms: Sequence[str], settings: Settings
) -> List[CatalogItem]:
    items: List[CatalogItem] = []
    dropped = 0
    for product in products:
        item = project_product(product, terms, settings)
        if item is None:
            dropped += 1
            continue
        items.append(item)
    logger.debug("project_products kept=%s dropped=%s terms=%s", len(items), dropped, list(terms))
    return items

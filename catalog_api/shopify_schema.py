"""Typed view of the Shopify ``ProductsWithInventory`` response.

Decoding happens once at the provider boundary. Structural fields (ids,
titles, the variant connection) are required and a response without them is
rejected as a whole. Inventory is the only optional branch: a variant with no
inventory level at the location, or no ``available`` quantity, counts as zero.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .errors import UpstreamSchemaError
from .models import PageInfo

AVAILABLE_QUANTITY = "available"


class InventoryQuantity(BaseModel):
    name: str
    quantity: int | None = None


class InventoryLevel(BaseModel):
    quantities: list[InventoryQuantity] = Field(default_factory=list)


class InventoryItem(BaseModel):
    inventoryLevel: InventoryLevel | None = None


class ProviderVariant(BaseModel):
    id: str
    title: str
    sku: str | None = None
    availableForSale: bool = False
    inventoryItem: InventoryItem | None = None

    @property
    def available_quantity(self) -> int:
        level = self.inventoryItem.inventoryLevel if self.inventoryItem else None
        if level is None:
            return 0
        for entry in level.quantities:
            if entry.name == AVAILABLE_QUANTITY:
                return entry.quantity or 0
        return 0


class VariantConnection(BaseModel):
    nodes: list[ProviderVariant] = Field(default_factory=list)


class FeaturedImage(BaseModel):
    url: str | None = None


class ProviderProduct(BaseModel):
    id: str
    title: str
    handle: str
    vendor: str = ""
    tags: list[str] = Field(default_factory=list)
    featuredImage: FeaturedImage | None = None
    variants: VariantConnection

    @property
    def image_url(self) -> str | None:
        if self.featuredImage is None:
            return None
        return self.featuredImage.url or None


class ProductConnection(BaseModel):
    pageInfo: PageInfo
    nodes: list[ProviderProduct] = Field(default_factory=list)


class ProductsData(BaseModel):
    products: ProductConnection


def decode_products(data: Any) -> ProductConnection:
    """Validate the ``data`` member of a GraphQL response."""
    if not isinstance(data, dict):
        raise UpstreamSchemaError("Shopify response carried no data")
    try:
        return ProductsData.model_validate(data).products
    except ValidationError as exc:
        raise UpstreamSchemaError(
            f"Unexpected Shopify response shape: {exc.error_count()} invalid field(s)"
        ) from exc

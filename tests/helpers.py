"""Canned Shopify payloads and a recording transport for the test suite."""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx


def make_variant(
    variant_id: str,
    quantity: Optional[int] = 5,
    *,
    title: str = "Default",
    sku: Optional[str] = "SKU",
    level: bool = True,
) -> Dict[str, Any]:
    inventory_level = None
    if level:
        quantities = [] if quantity is None else [{"name": "available", "quantity": quantity}]
        inventory_level = {"quantities": quantities, "location": {"id": "gid://shopify/Location/1", "name": "Clinic"}}
    return {
        "id": variant_id,
        "title": title,
        "sku": sku,
        "availableForSale": True,
        "inventoryItem": {"inventoryLevel": inventory_level},
    }


def make_product(
    product_id: str,
    *,
    title: str = "Crema hidratante",
    vendor: str = "Avène",
    tags: Optional[List[str]] = None,
    image: Optional[str] = "https://cdn.example.com/p.jpg",
    variants: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "id": product_id,
        "title": title,
        "handle": title.lower().replace(" ", "-"),
        "vendor": vendor,
        "tags": tags or [],
        "featuredImage": {"url": image} if image else None,
        "variants": {"nodes": variants if variants is not None else [make_variant(f"{product_id}-v1")]},
    }


def products_payload(
    nodes: List[Dict[str, Any]], *, has_next: bool = False, cursor: Optional[str] = None
) -> Dict[str, Any]:
    return {
        "data": {
            "products": {
                "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
                "nodes": nodes,
            }
        }
    }


class ShopifyStub:
    """Records outbound GraphQL calls and answers with a canned response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

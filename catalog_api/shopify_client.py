"""Shopify Admin GraphQL client.

One ``httpx.AsyncClient`` is opened per call; nothing is shared between
requests. Timeouts are httpx's defaults and failed calls are never retried.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .errors import (
    ConfigurationError,
    UpstreamGraphQLError,
    UpstreamHTTPError,
    UpstreamTransportError,
)
from .shopify_schema import ProductConnection, decode_products

logger = logging.getLogger(__name__)

VARIANTS_PER_PRODUCT = 50

PRODUCTS_QUERY = """
query ProductsWithInventory($query: String!, $first: Int!, $after: String, $loc: ID!) {
  products(first: $first, after: $after, query: $query) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      title
      handle
      vendor
      tags
      featuredImage { url }
      variants(first: %d) {
        nodes {
          id
          title
          sku
          availableForSale
          inventoryItem {
            inventoryLevel(locationId: $loc) {
              quantities(names: "available") {
                name
                quantity
              }
              location { id name }
            }
          }
        }
      }
    }
  }
}
""" % VARIANTS_PER_PRODUCT


class ShopifyClient:
    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    async def execute(self, query: str, variables: Dict[str, Any]) -> Any:
        """POST a GraphQL document and return its ``data`` member."""
        endpoint = self.settings.graphql_endpoint
        # The app rejects unconfigured requests earlier; this covers direct use.
        if endpoint is None or not self.settings.shopify_token:
            raise ConfigurationError(self.settings.missing())

        headers = {
            "X-Shopify-Access-Token": self.settings.shopify_token,
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    endpoint, json={"query": query, "variables": variables}, headers=headers
                )
        except httpx.HTTPError as exc:
            logger.warning("Shopify request to %s failed: %s", endpoint, exc)
            raise UpstreamTransportError(f"Shopify request failed: {exc}") from exc

        if not response.is_success:
            raise UpstreamHTTPError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError:
            # JSONDecodeError and UnicodeDecodeError both land here.
            logger.warning("Shopify returned a non-JSON body (status %s)", response.status_code)
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if payload.get("errors"):
            raise UpstreamGraphQLError(payload["errors"])
        return payload.get("data")

    async def fetch_products(
        self, search_filter: str, first: int, after: Optional[str]
    ) -> ProductConnection:
        variables = {
            "query": search_filter,
            "first": first,
            "after": after,
            "loc": self.settings.location_id,
        }
        logger.debug("Shopify products variables=%s", variables)
        data = await self.execute(PRODUCTS_QUERY, variables)
        return decode_products(data)

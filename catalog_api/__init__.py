"""Catalog backend over the Shopify Admin GraphQL product and inventory API."""

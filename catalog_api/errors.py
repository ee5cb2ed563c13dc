"""Exceptions raised by the catalog service.

Every failure is terminal for the request that hit it; the HTTP layer turns any
:class:`CatalogError` into a ``500`` with an ``{"error": ...}`` body.
"""
from __future__ import annotations

import json
from typing import Any, Iterable


class CatalogError(Exception):
    """Base class for errors surfaced to API callers."""


class ConfigurationError(CatalogError):
    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        names = ", ".join(self.missing)
        super().__init__(f"Missing required environment configuration: {names}")


class UpstreamError(CatalogError):
    """The Shopify Admin API call failed."""


class UpstreamHTTPError(UpstreamError):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Shopify HTTP {status_code}: {body}")


class UpstreamTransportError(UpstreamError):
    pass


class UpstreamGraphQLError(UpstreamError):
    def __init__(self, errors: Any) -> None:
        self.errors = errors
        super().__init__(f"Shopify GraphQL errors: {json.dumps(errors, ensure_ascii=False)}")


class UpstreamSchemaError(UpstreamError):
    pass

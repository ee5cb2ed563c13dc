"""Shared fixtures for the catalog API tests."""
from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
import pytest

from catalog_api.config import Settings
from tests.helpers import ShopifyStub


@pytest.fixture
def settings() -> Settings:
    return Settings(
        shopify_shop="test-shop.myshopify.com",
        shopify_token="shpat_test",
        location_id="gid://shopify/Location/1",
        top_tag="topdoctores",
    )


@pytest.fixture
def shopify_stub() -> Callable[..., ShopifyStub]:
    def factory(
        payload: Any = None,
        *,
        status_code: int = 200,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
    ) -> ShopifyStub:
        def responder(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=payload)

        return ShopifyStub(responder)

    return factory

"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_TOP_TAG = "topdoctores"
DEFAULT_BLOCKED_VENDOR = "plv"
DEFAULT_API_VERSION = "2024-07"

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _first_env(*names: str, default: str) -> str:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


@dataclass(frozen=True)
class Settings:
    """Settings container built once at process start.

    ``shopify_shop``, ``shopify_token`` and ``location_id`` are required; when
    any of them is empty the service still starts but refuses catalog requests.
    """

    shopify_shop: str = ""
    shopify_token: str = ""
    location_id: str = ""
    top_tag: str = DEFAULT_TOP_TAG
    blocked_vendor: str = DEFAULT_BLOCKED_VENDOR
    api_version: str = DEFAULT_API_VERSION
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            shopify_shop=_get_env("SHOPIFY_SHOP", "").strip(),
            shopify_token=_get_env("SHOPIFY_TOKEN", "").strip(),
            location_id=_get_env("CLINIC_LOCATION_ID", "").strip(),
            # Both spellings are in use across deployments.
            top_tag=_first_env(
                "FEATURE_TOPDOCTORES_TAG",
                "FEATURE_TOPDOCTORS_TAG",
                default=DEFAULT_TOP_TAG,
            ).lower(),
            blocked_vendor=_get_env("BLOCKED_VENDOR", DEFAULT_BLOCKED_VENDOR),
            api_version=_get_env("SHOPIFY_API_VERSION", DEFAULT_API_VERSION),
            log_level=_get_env("LOG_LEVEL", "INFO"),
        )

    def missing(self) -> List[str]:
        """Names of the required environment variables that are not set."""
        required = (
            ("SHOPIFY_SHOP", self.shopify_shop),
            ("SHOPIFY_TOKEN", self.shopify_token),
            ("CLINIC_LOCATION_ID", self.location_id),
        )
        return [name for name, value in required if not value]

    def startup_summary(self) -> dict:
        """Which required settings are present, plus the effective top tag."""
        return {
            "present": {
                "SHOPIFY_SHOP": bool(self.shopify_shop),
                "SHOPIFY_TOKEN": bool(self.shopify_token),
                "CLINIC_LOCATION_ID": bool(self.location_id),
            },
            "top_tag": self.top_tag,
        }

    @property
    def graphql_endpoint(self) -> Optional[str]:
        if not self.shopify_shop:
            return None
        return f"https://{self.shopify_shop}/admin/api/{self.api_version}/graphql.json"

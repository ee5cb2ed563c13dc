"""Client-side session for the catalog API.

A session owns the incremental fetch state a catalog UI needs: a new search
resets the accumulated items and cursor, ``load_more`` appends the next page.
Every request carries ``Authorization: Bearer <token>`` from a pluggable
credential provider, and no request is sent until a token is available.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

import httpx
from pydantic import ValidationError

from .config import DEFAULT_PAGE_SIZE
from .models import CatalogItem, ProductsResponse

logger = logging.getLogger(__name__)


class AuthRequired(Exception):
    """No credential could be obtained; the user has to sign in."""


class CatalogRequestError(Exception):
    """The catalog API answered with an error or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class CredentialProvider(Protocol):
    def get_token(self) -> str: ...


@dataclass
class StaticTokenProvider:
    token: Optional[str] = None

    @classmethod
    def from_env(cls, name: str = "CATALOG_API_TOKEN") -> "StaticTokenProvider":
        return cls(os.getenv(name) or None)

    def get_token(self) -> str:
        if not self.token:
            raise AuthRequired("No access token configured")
        return self.token


@dataclass
class ChainedTokenProvider:
    """Try a silent provider first, then fall back to an interactive one."""

    silent: CredentialProvider
    interactive: Optional[CredentialProvider] = None

    def get_token(self) -> str:
        try:
            return self.silent.get_token()
        except AuthRequired:
            if self.interactive is None:
                raise
            logger.info("Silent token acquisition failed; falling back to interactive sign-in")
            return self.interactive.get_token()


@dataclass
class CatalogSession:
    base_url: str
    credentials: CredentialProvider
    page_size: int = DEFAULT_PAGE_SIZE
    client_factory: Callable[[], httpx.AsyncClient] = httpx.AsyncClient
    query: str = ""
    items: List[CatalogItem] = field(default_factory=list)
    cursor: Optional[str] = None
    has_next: bool = False

    async def search(self, query: str) -> List[CatalogItem]:
        """Start a new search, discarding previously loaded pages."""
        self.query = query
        self.items = []
        self.cursor = None
        self.has_next = False
        page = await self._fetch(after=None)
        self.items = list(page.items)
        return self.items

    async def load_more(self) -> List[CatalogItem]:
        """Append the next page of the current search; returns the new items."""
        if not self.has_next:
            return []
        page = await self._fetch(after=self.cursor)
        self.items.extend(page.items)
        return list(page.items)

    async def _fetch(self, after: Optional[str]) -> ProductsResponse:
        token = self.credentials.get_token()
        params = {"first": str(self.page_size)}
        if self.query:
            params["query"] = self.query
        if after:
            params["after"] = after

        url = f"{self.base_url.rstrip('/')}/products"
        try:
            async with self.client_factory() as client:
                response = await client.get(
                    url, params=params, headers={"Authorization": f"Bearer {token}"}
                )
        except httpx.HTTPError as exc:
            raise CatalogRequestError(f"Catalog API unreachable: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthRequired(f"Catalog API rejected the credential (HTTP {response.status_code})")
        if not response.is_success:
            raise CatalogRequestError(_error_message(response), response.status_code)

        try:
            page = ProductsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise CatalogRequestError(
                f"Catalog API returned an unreadable page (HTTP {response.status_code})",
                response.status_code,
            ) from exc
        self.has_next = page.pageInfo.hasNextPage
        self.cursor = page.pageInfo.endCursor
        logger.debug("Fetched %s items (has_next=%s cursor=%r)", page.count, self.has_next, self.cursor)
        return page


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return f"HTTP {response.status_code}: {body['error']}"
    return f"HTTP {response.status_code}"

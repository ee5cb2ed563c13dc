"""FastAPI application wiring the catalog service."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .config import Settings
from .errors import CatalogError, ConfigurationError
from .models import ErrorResponse, HealthResponse, ProductsResponse, SearchRequest
from .search import search_products
from .shopify_client import ShopifyClient

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    # ``force=True`` replaces uvicorn's default handlers.
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx"):
        logging.getLogger(name).setLevel(level)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_shopify_client(request: Request) -> ShopifyClient:
    return ShopifyClient(request.app.state.settings, transport=request.app.state.transport)


def ensure_ready(request: Request) -> None:
    error: Optional[ConfigurationError] = request.app.state.config_error
    if error is not None:
        raise error


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, ConfigurationError):
        logger.error("Rejecting %s: %s", request.url.path, exc)
    else:
        logger.error("Request %s failed: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


def create_app(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the application around an already-loaded settings object.

    Configuration is validated here, once. A missing setting does not stop the
    app from starting: it is kept as the app's "unready" state and returned as
    a 500 by every endpoint that needs Shopify.
    """
    missing = settings.missing()
    config_error = ConfigurationError(missing) if missing else None
    if config_error is not None:
        logger.warning("Catalog API is not configured: %s", settings.startup_summary())

    app = FastAPI(title="Catalog API")
    app.state.settings = settings
    app.state.transport = transport
    app.state.config_error = config_error
    app.add_exception_handler(CatalogError, catalog_error_handler)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(ts=datetime.now(timezone.utc).isoformat())

    @app.get(
        "/products",
        response_model=ProductsResponse,
        responses={500: {"model": ErrorResponse}},
        dependencies=[Depends(ensure_ready)],
    )
    async def products(
        query: Optional[str] = Query(None, description="Free text over title, vendor and tags"),
        first: Optional[str] = Query(None, description="Page size, 1-50, default 20"),
        after: Optional[str] = Query(None, description="Cursor returned by the previous page"),
        settings: Settings = Depends(get_settings),
        client: ShopifyClient = Depends(get_shopify_client),
    ) -> ProductsResponse:
        search_request = SearchRequest.from_params(query, first, after)
        return await search_products(client, settings, search_request)

    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level)
logger.info("Logging configured at %s", _settings.log_level.upper())

app = create_app(_settings)

"""httpx-backed implementation of CatalogGateway for the FakeStore API.

Endpoints:
    GET /products[?limit=N]
    GET /products/{id}
    GET /products/categories
    GET /products/category/{name}
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from storefront.domain.exceptions import CatalogResponseError, CatalogTransportError
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_gateway import CatalogGateway

logger = logging.getLogger(__name__)


class FakeStoreCatalogGateway(CatalogGateway):

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    # --- CatalogGateway interface ---------------------------------------------

    async def list_products(self, limit: int | None = None) -> list[Product]:
        params = {"limit": limit} if limit else None
        data = await self._get("/products", params=params)
        return [Product.from_raw(raw) for raw in data]

    async def get_product(self, product_id: int) -> Product:
        data = await self._get(f"/products/{product_id}")
        if not data:
            # the API answers 200 with an empty body for unknown ids
            raise CatalogResponseError(404, f"Product {product_id} not found")
        return Product.from_raw(data)

    async def list_categories(self) -> list[str]:
        data = await self._get("/products/categories")
        return [str(name) for name in data]

    async def list_by_category(self, category: str) -> list[Product]:
        data = await self._get(f"/products/category/{quote(category, safe='')}")
        return [Product.from_raw(raw) for raw in data]

    # --- HTTP helpers ---------------------------------------------------------

    async def _get(self, path: str, params: dict | None = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error("Catalog API unavailable: %s", e)
            raise CatalogTransportError(str(e)) from e
        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: httpx.Response) -> Any:
        if response.is_success:
            if not response.content:
                return None
            return response.json()

        message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message")
        raise CatalogResponseError(response.status_code, message)

"""Abstract port to the remote product catalog.

Defined in the domain layer so the engine never depends on the HTTP
client. Implementations raise ``CatalogTransportError`` when the API
cannot be reached and ``CatalogResponseError`` for non-success answers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class CatalogGateway(ABC):

    @abstractmethod
    async def list_products(self, limit: int | None = None) -> list[Product]:
        """Return catalog products, optionally capped at *limit* results."""

    @abstractmethod
    async def get_product(self, product_id: int) -> Product:
        """Return a single product by its ID."""

    @abstractmethod
    async def list_categories(self) -> list[str]:
        """Return every category name."""

    @abstractmethod
    async def list_by_category(self, category: str) -> list[Product]:
        """Return the products within one category."""

"""Catalog store: remote fetches, memoization and loading/error state.

Two resources are memoized: the unlimited product list and the category
names.  Each is held as a shared ``asyncio.Task`` so concurrent callers
attach to the request already in flight instead of issuing another one.
Limited, by-id and by-category fetches always go to the network.

Every fetch publishes ``LOADING`` on start, then ``SUCCESS`` (clearing the
error) or ``ERROR`` with a classified ``ApiError``, which is also raised to
the caller.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, TypeVar

from storefront.application.live_value import LiveValue
from storefront.domain.exceptions import (
    ApiError,
    CatalogResponseError,
    CatalogTransportError,
    ErrorCode,
)
from storefront.domain.model.product import Product
from storefront.domain.repository.catalog_gateway import CatalogGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_PRODUCTS = "products"
CATEGORIES = "categories"


class LoadingState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


def classify_error(exc: BaseException) -> ApiError:
    """Map a gateway failure onto the ApiError taxonomy."""
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, CatalogTransportError):
        return ApiError(
            "Network error occurred. Please check your connection.",
            code=ErrorCode.NETWORK_ERROR,
            details=str(exc),
        )
    if isinstance(exc, CatalogResponseError):
        if exc.status == 404:
            return ApiError("Product not found.", code=ErrorCode.NOT_FOUND, status=404)
        if exc.status == 500:
            return ApiError(
                "Server error. Please try again later.",
                code=ErrorCode.SERVER_ERROR,
                status=500,
            )
        return ApiError(
            exc.server_message or "An unexpected error occurred.",
            code=ErrorCode.UNKNOWN_ERROR,
            status=exc.status,
        )
    return ApiError(
        "An unexpected error occurred.",
        code=ErrorCode.UNKNOWN_ERROR,
        details=str(exc),
    )


class CatalogStore:

    def __init__(self, gateway: CatalogGateway) -> None:
        self._gateway = gateway
        self._cache: dict[str, asyncio.Task] = {}
        self.loading: LiveValue[LoadingState] = LiveValue(LoadingState.IDLE)
        self.error: LiveValue[ApiError | None] = LiveValue(None)

    # --- Fetch operations -----------------------------------------------------

    async def fetch_all(self, limit: int | None = None) -> list[Product]:
        """Return catalog products.

        Without *limit* the result is memoized and shared; with *limit* a
        fresh request is issued and the memoized entry is left untouched.
        """
        if limit is None:
            products = await self._shared(
                ALL_PRODUCTS, lambda: self._gateway.list_products()
            )
        else:
            products = await self._tracked(
                f"products?limit={limit}", self._gateway.list_products(limit)
            )
        return list(products)

    async def fetch_by_id(self, product_id: int) -> Product:
        return await self._tracked(
            f"products/{product_id}", self._gateway.get_product(product_id)
        )

    async def fetch_categories(self) -> list[str]:
        categories = await self._shared(
            CATEGORIES, lambda: self._gateway.list_categories()
        )
        return list(categories)

    async def fetch_by_category(self, category: str) -> list[Product]:
        return await self._tracked(
            f"products/category/{category}",
            self._gateway.list_by_category(category),
        )

    def invalidate_cache(self) -> None:
        """Forget the memoized product list and categories.

        A request already in flight still completes for whoever awaits it,
        but the next call issues a new one.
        """
        self._cache.pop(ALL_PRODUCTS, None)
        self._cache.pop(CATEGORIES, None)
        logger.info("Catalog cache invalidated")

    def is_cached(self, resource: str) -> bool:
        return resource in self._cache

    # --- Internal helpers -----------------------------------------------------

    async def _shared(
        self, resource: str, factory: Callable[[], Awaitable[list]]
    ) -> list:
        task = self._cache.get(resource)
        if task is None:
            task = asyncio.ensure_future(self._tracked(resource, factory()))
            task.add_done_callback(
                lambda done, key=resource: self._evict_failed(key, done)
            )
            self._cache[resource] = task
        else:
            logger.debug("Reusing %s request", resource)
        # shield: a cancelled caller must not cancel the request other
        # callers are attached to
        return await asyncio.shield(task)

    def _evict_failed(self, resource: str, task: asyncio.Task) -> None:
        if task.cancelled() or task.exception() is not None:
            if self._cache.get(resource) is task:
                del self._cache[resource]

    async def _tracked(self, resource: str, request: Awaitable[T]) -> T:
        self.loading.set(LoadingState.LOADING)
        logger.debug("Fetching %s", resource)
        try:
            result = await request
        except Exception as exc:
            error = classify_error(exc)
            logger.error(
                "Fetching %s failed: %s (%s)", resource, error.message, error.code.value
            )
            self.loading.set(LoadingState.ERROR)
            self.error.set(error)
            if error is exc:
                raise
            raise error from exc
        self.loading.set(LoadingState.SUCCESS)
        self.error.set(None)
        return result

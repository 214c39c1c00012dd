"""Query composer: live criteria edits in, live product list out.

Edits are debounced on the trailing edge with a single timer slot, and an
accepted criteria value equal to the previous accepted one is dropped.
Each accepted value is tagged with the next sequence number before its
fetch starts; a result is published only if its tag is still the latest,
so a slow early response can never overwrite a fast later one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterable

from storefront.application.catalog_store import CatalogStore
from storefront.application.live_value import LiveValue
from storefront.domain.exceptions import ApiError
from storefront.domain.model.filters import FilterCriteria, apply_filters
from storefront.domain.model.product import Product

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.3


class QueryComposer:

    def __init__(
        self,
        catalog: CatalogStore,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ) -> None:
        self._catalog = catalog
        self._debounce_seconds = debounce_seconds
        self._timer: asyncio.TimerHandle | None = None
        self._held: FilterCriteria | None = None
        self._last_accepted: FilterCriteria | None = None
        self._sequence = 0
        self._in_flight: set[asyncio.Task] = set()
        self.results: LiveValue[list[Product]] = LiveValue([])

    @property
    def sequence(self) -> int:
        """Number of criteria values accepted so far."""
        return self._sequence

    # --- Input ----------------------------------------------------------------

    def submit(self, criteria: FilterCriteria) -> None:
        """Record a criteria edit and restart the debounce window.

        Must be called from within the running event loop.
        """
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._held = criteria
        self._timer = loop.call_later(self._debounce_seconds, self._accept)

    async def consume(self, source: AsyncIterable[FilterCriteria]) -> None:
        """Feed every criteria value from *source* through ``submit``."""
        async for criteria in source:
            self.submit(criteria)

    # --- One-shot query -------------------------------------------------------

    async def resolve(self, criteria: FilterCriteria) -> list[Product]:
        """Fetch the server-side list for *criteria* and refine it locally."""
        if criteria.category:
            products = await self._catalog.fetch_by_category(criteria.category)
        elif criteria.limit:
            products = await self._catalog.fetch_all(criteria.limit)
        else:
            products = await self._catalog.fetch_all()
        return apply_filters(products, criteria)

    # --- Lifecycle ------------------------------------------------------------

    async def settle(self) -> None:
        """Wait until no edit is pending and no fetch is in flight."""
        while self._timer is not None or self._in_flight:
            if self._in_flight:
                await asyncio.wait(set(self._in_flight))
            else:
                await asyncio.sleep(self._debounce_seconds)

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        for task in list(self._in_flight):
            task.cancel()

    # --- Internal helpers -----------------------------------------------------

    def _accept(self) -> None:
        self._timer = None
        criteria = self._held
        if criteria is None:
            return
        if self._sequence and criteria == self._last_accepted:
            logger.debug("Criteria unchanged, skipping fetch")
            return
        self._last_accepted = criteria
        self._sequence += 1
        task = asyncio.get_running_loop().create_task(
            self._run(self._sequence, criteria)
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run(self, tag: int, criteria: FilterCriteria) -> None:
        try:
            products = await self.resolve(criteria)
        except ApiError as exc:
            # previous results stay visible; the error is on the catalog's
            # error broadcast
            logger.warning("Query #%d failed: %s", tag, exc.message)
            return
        if tag != self._sequence:
            logger.debug("Discarding stale result for query #%d (latest #%d)", tag, self._sequence)
            return
        self.results.set(products)

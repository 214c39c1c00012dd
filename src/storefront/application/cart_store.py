"""Cart store: the line-item collection, its summary and its persistence.

The store is the only writer of the cart.  Every mutation is synchronous,
persists the full collection under ``CART_STORAGE_KEY`` and then
broadcasts the new items and summary.  Storage problems never escape:
an unreadable cart loads as empty, an unwritable one stays in memory.
"""

from __future__ import annotations

import json
import logging

from storefront.application.live_value import LiveValue
from storefront.domain.exceptions import (
    DomainException,
    StorageUnavailableError,
    ValidationError,
)
from storefront.domain.model.cart import MAX_LINE_QUANTITY, CartItem, CartSummary
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "storefront_cart"


class CartStore:

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage
        self._items: dict[int, CartItem] = self._load()
        self.changes: LiveValue[tuple[CartItem, ...]] = LiveValue(tuple(self._items.values()))
        self.summaries: LiveValue[CartSummary] = LiveValue(self.summary())

    # --- Queries --------------------------------------------------------------

    def items(self) -> list[CartItem]:
        return list(self._items.values())

    def summary(self) -> CartSummary:
        return CartSummary.of(self._items.values())

    def contains(self, product_id: int) -> bool:
        return product_id in self._items

    def quantity_of(self, product_id: int) -> int:
        item = self._items.get(product_id)
        return item.quantity.value if item is not None else 0

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, quantity: int = 1) -> None:
        """Add *quantity* units, merging into an existing line if present."""
        if quantity <= 0:
            raise ValidationError("Quantity to add must be positive")
        existing = self._items.get(product.id)
        if existing is not None:
            item = CartItem(product=existing.product, quantity=existing.quantity + quantity)
        else:
            item = CartItem(product=product, quantity=Quantity(quantity))
        self._items[product.id] = item
        self._commit()

    def set_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(product_id)
            return
        item = self._items.get(product_id)
        if item is None:
            return
        self._items[product_id] = CartItem(product=item.product, quantity=Quantity(quantity))
        self._commit()

    def increment(self, product_id: int) -> None:
        """Add one unit, up to ``MAX_LINE_QUANTITY``."""
        current = self.quantity_of(product_id)
        if current and current < MAX_LINE_QUANTITY:
            self.set_quantity(product_id, current + 1)

    def decrement(self, product_id: int) -> None:
        """Remove one unit without ever dropping the line."""
        current = self.quantity_of(product_id)
        if current > 1:
            self.set_quantity(product_id, current - 1)

    def remove(self, product_id: int) -> None:
        if self._items.pop(product_id, None) is not None:
            self._commit()

    def clear(self) -> None:
        self._items.clear()
        self._commit()

    # --- Persistence ----------------------------------------------------------

    def _commit(self) -> None:
        self._save()
        self.changes.set(tuple(self._items.values()))
        self.summaries.set(self.summary())

    def _save(self) -> None:
        payload = json.dumps([self._to_raw(item) for item in self._items.values()])
        try:
            self._storage.set(CART_STORAGE_KEY, payload)
        except StorageUnavailableError as exc:
            logger.warning("Failed to save cart to storage: %s", exc)

    def _load(self) -> dict[int, CartItem]:
        try:
            blob = self._storage.get(CART_STORAGE_KEY)
        except StorageUnavailableError as exc:
            logger.warning("Failed to load cart from storage: %s", exc)
            return {}
        if not blob:
            return {}
        try:
            items = [self._to_domain(raw) for raw in json.loads(blob)]
        except (
            ValueError, KeyError, TypeError, AttributeError, OverflowError,
            RecursionError, DomainException,
        ) as exc:
            logger.warning("Discarding corrupt cart in storage: %s", exc)
            return {}
        merged: dict[int, CartItem] = {}
        for item in items:
            if item.id in merged:
                first = merged[item.id]
                merged[item.id] = CartItem(
                    product=first.product, quantity=first.quantity + item.quantity.value
                )
            else:
                merged[item.id] = item
        logger.debug("Loaded %d cart line(s) from storage", len(merged))
        return merged

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: CartItem) -> dict:
        return {
            "id": item.id,
            "quantity": item.quantity.value,
            # informational only; recomputed on load
            "lineTotal": str(item.line_total.amount),
            "product": item.product.to_raw(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartItem:
        return CartItem(
            product=Product.from_raw(raw["product"]),
            quantity=Quantity(raw["quantity"]),
        )

"""Cart line items and the summary derived from them.

A CartItem holds a reference to the Product snapshot it was created
from.  Its line total is always computed from that snapshot's price, so
a stale total can never survive a reload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity

# Free shipping for now; kept as a policy constant so the total formula
# does not change when it stops being free.
SHIPPING_FEE = Money.zero()

MAX_LINE_QUANTITY = 99


@dataclass(frozen=True)
class CartItem:
    """One product entry in the cart.

    Immutable; the owning store swaps in a new CartItem whenever the user
    edits the line.
    """

    product: Product
    quantity: Quantity

    @property
    def id(self) -> int:
        return self.product.id

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value


@dataclass(frozen=True)
class CartSummary:
    subtotal: Money
    shipping: Money
    total: Money
    item_count: int

    @staticmethod
    def of(items: Iterable[CartItem]) -> CartSummary:
        """Derive the summary from the current line items."""
        subtotal = Money.zero()
        item_count = 0
        for item in items:
            subtotal = subtotal + item.line_total
            item_count += item.quantity.value
        return CartSummary(
            subtotal=subtotal,
            shipping=SHIPPING_FEE,
            total=subtotal + SHIPPING_FEE,
            item_count=item_count,
        )

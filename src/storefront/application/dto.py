"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import CartItem, CartSummary


@dataclass(frozen=True)
class DeliveryDetails:
    """Input: where the order should go."""

    full_name: str
    address: str
    phone: str


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: int
    title: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    subtotal: str
    shipping: str
    total: str
    item_count: int


@dataclass(frozen=True)
class OrderConfirmationDTO:
    """Output: what was ordered, captured before the cart was cleared."""

    customer_name: str
    address: str
    phone: str
    lines: list[CartLineDTO]
    total: str
    item_count: int


def to_cart_dto(items: list[CartItem], summary: CartSummary) -> CartDTO:
    return CartDTO(
        lines=[to_line_dto(item) for item in items],
        subtotal=str(summary.subtotal),
        shipping=str(summary.shipping),
        total=str(summary.total),
        item_count=summary.item_count,
    )


def to_line_dto(item: CartItem) -> CartLineDTO:
    return CartLineDTO(
        product_id=item.id,
        title=item.product.title,
        quantity=item.quantity.value,
        unit_price=str(item.product.price),
        line_total=str(item.line_total),
    )

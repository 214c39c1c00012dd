"""Integration tests for the PlaceOrder use case."""

import pytest

from storefront.application.cart_store import CartStore
from storefront.application.checkout import PlaceOrderHandler
from storefront.application.dto import DeliveryDetails
from storefront.domain.exceptions import ValidationError
from tests.fakes import InMemoryKeyValueStore, make_product

VALID = DeliveryDetails(full_name="Ada Lovelace", address="12 Analytical Row", phone="+441234567")


def _setup(with_items: bool = True) -> tuple[PlaceOrderHandler, CartStore]:
    cart = CartStore(InMemoryKeyValueStore())
    if with_items:
        cart.add(make_product(1, "10.00", title="Mug"), 2)
        cart.add(make_product(2, "4.50", title="Spoon"))
    return PlaceOrderHandler(cart), cart


class TestPlaceOrderHappyPath:

    def test_confirmation_snapshots_cart(self):
        handler, _ = _setup()
        confirmation = handler.handle(VALID)
        assert confirmation.customer_name == "Ada Lovelace"
        assert confirmation.total == "$24.50"
        assert confirmation.item_count == 3
        assert [line.title for line in confirmation.lines] == ["Mug", "Spoon"]
        assert confirmation.lines[0].line_total == "$20.00"

    def test_cart_is_cleared(self):
        handler, cart = _setup()
        handler.handle(VALID)
        assert cart.items() == []


class TestPlaceOrderValidation:

    def test_empty_cart_rejected(self):
        handler, _ = _setup(with_items=False)
        with pytest.raises(ValidationError, match="Cart is empty"):
            handler.handle(VALID)

    def test_short_name_rejected(self):
        handler, cart = _setup()
        with pytest.raises(ValidationError, match="Full name"):
            handler.handle(DeliveryDetails("A", VALID.address, VALID.phone))
        assert cart.summary().item_count == 3

    def test_short_address_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Address"):
            handler.handle(DeliveryDetails(VALID.full_name, "Main St", VALID.phone))

    def test_bad_phone_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="phone"):
            handler.handle(DeliveryDetails(VALID.full_name, VALID.address, "012-345"))

"""Application service: Place Order use case.

Validates delivery details, snapshots the cart into a confirmation and
empties the cart.  Orders are not submitted anywhere; the confirmation
is the only record.
"""

from __future__ import annotations

import logging
import re

from storefront.application.cart_store import CartStore
from storefront.application.dto import (
    DeliveryDetails,
    OrderConfirmationDTO,
    to_line_dto,
)
from storefront.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_ADDRESS_LENGTH = 10
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")


class PlaceOrderHandler:

    def __init__(self, cart: CartStore) -> None:
        self._cart = cart

    def handle(self, delivery: DeliveryDetails) -> OrderConfirmationDTO:
        self._validate(delivery)

        items = self._cart.items()
        if not items:
            raise ValidationError("Cart is empty")

        summary = self._cart.summary()
        confirmation = OrderConfirmationDTO(
            customer_name=delivery.full_name.strip(),
            address=delivery.address.strip(),
            phone=delivery.phone.strip(),
            lines=[to_line_dto(item) for item in items],
            total=str(summary.total),
            item_count=summary.item_count,
        )

        self._cart.clear()
        logger.info(
            "Order placed for %s: %d item(s), total %s",
            confirmation.customer_name,
            confirmation.item_count,
            confirmation.total,
        )
        return confirmation

    @staticmethod
    def _validate(delivery: DeliveryDetails) -> None:
        name = (delivery.full_name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"Full name must be at least {MIN_NAME_LENGTH} characters"
            )
        address = (delivery.address or "").strip()
        if len(address) < MIN_ADDRESS_LENGTH:
            raise ValidationError(
                f"Address must be at least {MIN_ADDRESS_LENGTH} characters"
            )
        if not PHONE_PATTERN.match((delivery.phone or "").strip()):
            raise ValidationError("Please enter a valid phone number")

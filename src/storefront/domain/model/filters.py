"""Filter criteria and the client-side refinement applied to catalog lists.

The catalog API can only narrow by category or cap the result count.
Everything else (text search, price bounds, ordering) happens here, on
whatever list the server returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product


class SortField(Enum):
    PRICE = "price"
    TITLE = "title"
    RATING = "rating"


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class FilterCriteria:
    """The desired product view, as last edited by the user.

    Two criteria with the same field values are equal, which is what the
    query pipeline relies on to suppress repeated identical edits.
    """

    search_term: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    limit: int | None = None
    sort_by: SortField | None = None
    sort_order: SortOrder = SortOrder.ASC

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit <= 0:
            raise ValidationError("Result limit must be positive")


_SORT_KEYS: dict[SortField, Callable[[Product], object]] = {
    SortField.PRICE: lambda p: p.price.amount,
    SortField.TITLE: lambda p: p.title.lower(),
    SortField.RATING: lambda p: p.rate,
}


def apply_filters(products: Iterable[Product], criteria: FilterCriteria) -> list[Product]:
    """Refine a server-side product list.

    Order is fixed: text search, then price bounds, then a stable sort.
    The input is never mutated.
    """
    filtered = list(products)

    if criteria.search_term:
        needle = criteria.search_term.lower()
        filtered = [
            p for p in filtered
            if needle in p.title.lower() or needle in p.description.lower()
        ]

    if criteria.min_price is not None:
        filtered = [p for p in filtered if p.price.amount >= criteria.min_price]

    if criteria.max_price is not None:
        filtered = [p for p in filtered if p.price.amount <= criteria.max_price]

    if criteria.sort_by is not None:
        # sorted() keeps ties in input order in both directions
        filtered = sorted(
            filtered,
            key=_SORT_KEYS[criteria.sort_by],
            reverse=criteria.sort_order is SortOrder.DESC,
        )

    return filtered

"""Product value as served by the remote catalog.

Products are created by the catalog gateway on every fetch and never
mutated afterwards, so they can be shared freely between the catalog
cache, filtered views and cart lines.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductRating:
    rate: float
    count: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.rate <= 5:
            raise ValidationError(f"Rating must be between 0 and 5, got {self.rate}")
        if self.count < 0:
            raise ValidationError("Rating count cannot be negative")


@dataclass(frozen=True)
class Product:
    """A sellable catalog record."""

    id: int
    title: str
    price: Money
    description: str = ""
    category: str = ""
    image: str = ""
    rating: ProductRating | None = None

    @property
    def rate(self) -> float:
        """Average rating, 0 for unrated products."""
        return self.rating.rate if self.rating is not None else 0.0

    # --- Catalog wire format --------------------------------------------------

    @staticmethod
    def from_raw(raw: dict) -> Product:
        """Build a Product from a catalog API / stored JSON record."""
        rating = raw.get("rating")
        return Product(
            id=int(raw["id"]),
            title=raw["title"],
            price=Money.of(raw["price"]),
            description=raw.get("description") or "",
            category=raw.get("category") or "",
            image=raw.get("image") or "",
            rating=(
                ProductRating(rate=float(rating["rate"]), count=int(rating.get("count", 0)))
                if rating
                else None
            ),
        )

    def to_raw(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "price": str(self.price.amount),
            "description": self.description,
            "category": self.category,
            "image": self.image,
            "rating": (
                {"rate": self.rating.rate, "count": self.rating.count}
                if self.rating is not None
                else None
            ),
        }

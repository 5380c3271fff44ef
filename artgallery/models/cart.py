from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from artgallery.models.artwork import Artwork


@dataclass(frozen=True)
class CartEntry:
    """An artwork snapshot paired with the number of units the shopper wants."""

    artwork: Artwork
    quantity: int = 1

    @property
    def id(self) -> str:
        return self.artwork.id

    @property
    def line_total(self) -> Decimal:
        return self.artwork.price * self.quantity


def cart_total(entries: Iterable[CartEntry]) -> Decimal:
    """Sum of price x quantity over all entries, computed from scratch."""
    return sum((entry.line_total for entry in entries), Decimal("0"))


def cart_count(entries: Iterable[CartEntry]) -> int:
    """Total number of units in the cart."""
    return sum(entry.quantity for entry in entries)

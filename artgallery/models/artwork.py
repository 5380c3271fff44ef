from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


class InvalidArtworkError(ValueError):
    """Raised when a catalog row cannot be read as an artwork."""


def parse_price(value: Any) -> Decimal:
    """
    Parse a price into a non-negative Decimal.

    Numbers go through ``str`` first so that a float such as 19.99 becomes
    Decimal("19.99") instead of its binary approximation.
    """
    if value is None or isinstance(value, bool):
        raise InvalidArtworkError(f"Invalid price: {value!r}")
    try:
        price = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidArtworkError(f"Invalid price: {value!r}") from e
    if not price.is_finite() or price < 0:
        raise InvalidArtworkError(f"Invalid price: {value!r}")
    return price


@dataclass(frozen=True)
class Artwork:
    """
    A catalog item.

    Attributes:
        id: Opaque identifier assigned by the remote catalog
        title: Display title
        artist: Artist name
        description: Free-form description
        price: Unit price in major currency units (never negative)
        image_url: Stored image URL, None when the row has none
        dimensions: e.g. '24" x 36"'
        medium: e.g. "Oil on Canvas"
        category: Category or type of work
        year: Year the work was made
        featured: Shown on the home page
        quantity: Units available (default 1)
    """

    id: str
    title: str
    artist: str
    price: Decimal
    description: str = ""
    image_url: str | None = None
    dimensions: str | None = None
    medium: str | None = None
    category: str | None = None
    year: str | None = None
    featured: bool = False
    quantity: int = 1

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Artwork":
        """
        Map a remote catalog row to an Artwork.

        Rows written by different versions of the admin form use either
        ``imageUrl`` or ``image_url``, and either ``category`` or ``type``.
        """
        if row.get("id") is None:
            raise InvalidArtworkError("Artwork row has no id")

        quantity = row.get("quantity")
        try:
            stock = int(quantity) if quantity is not None else 1
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidArtworkError(f"Invalid quantity: {quantity!r}") from e
        year = row.get("year")

        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            artist=row.get("artist") or "",
            price=parse_price(row.get("price")),
            description=row.get("description") or "",
            image_url=row.get("imageUrl") or row.get("image_url") or None,
            dimensions=row.get("dimensions"),
            medium=row.get("medium"),
            category=row.get("category") or row.get("type"),
            year=str(year) if year is not None else None,
            featured=bool(row.get("featured", False)),
            quantity=stock,
        )

    def to_row(self) -> dict[str, Any]:
        """Insert/update payload in the remote table's column naming."""
        return {
            "title": self.title,
            "artist": self.artist,
            "description": self.description,
            "price": float(self.price),
            "imageUrl": self.image_url,
            "dimensions": self.dimensions,
            "medium": self.medium,
            "category": self.category,
            "year": self.year,
            "featured": self.featured,
            "quantity": self.quantity,
        }

    def display_image_url(self, placeholder: str) -> str:
        """Image to render; falls back to the placeholder when none is stored."""
        return self.image_url or placeholder

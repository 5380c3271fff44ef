"""
Serialization of the session state slices.

Each slice is stored as one JSON document under its own key:

- ``darkMode``: JSON boolean
- ``cart``: JSON array of cart entries (artwork fields plus ``quantity``)
- ``favorites``: JSON array of artwork ids

There is no schema version. Prices are written as decimal strings so that
a round trip reproduces the exact value; plain JSON numbers are accepted
on read because older payloads stored them that way.
"""

import json
from collections.abc import Sequence
from typing import Any

from artgallery.models.artwork import Artwork, InvalidArtworkError
from artgallery.models.cart import CartEntry

DARK_MODE_KEY = "darkMode"
CART_KEY = "cart"
FAVORITES_KEY = "favorites"


class CorruptStateError(ValueError):
    """Raised when a stored payload cannot be decoded into its slice."""


def _load_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError, RecursionError) as e:
        raise CorruptStateError(f"Malformed JSON: {e}") from e


# --- Dark mode ---


def encode_dark_mode(enabled: bool) -> str:
    return json.dumps(enabled)


def decode_dark_mode(raw: str) -> bool:
    value = _load_json(raw)
    if not isinstance(value, bool):
        raise CorruptStateError(f"Expected a boolean, got {type(value).__name__}")
    return value


# --- Cart ---


def _entry_to_dict(entry: CartEntry) -> dict[str, Any]:
    artwork = entry.artwork
    return {
        "id": artwork.id,
        "title": artwork.title,
        "artist": artwork.artist,
        "description": artwork.description,
        "price": str(artwork.price),
        "imageUrl": artwork.image_url,
        "dimensions": artwork.dimensions,
        "medium": artwork.medium,
        "category": artwork.category,
        "year": artwork.year,
        "featured": artwork.featured,
        # Units available in the catalog; "quantity" is the cart quantity
        "stock": artwork.quantity,
        "quantity": entry.quantity,
    }


def _entry_from_dict(item: Any) -> CartEntry:
    if not isinstance(item, dict):
        raise CorruptStateError("Cart entry is not an object")

    quantity = item.get("quantity", 1)
    if quantity is None:
        quantity = 1
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise CorruptStateError(f"Invalid cart quantity: {quantity!r}")

    row = dict(item)
    row["quantity"] = item.get("stock", 1)
    try:
        artwork = Artwork.from_row(row)
    except (InvalidArtworkError, TypeError, ValueError, OverflowError) as e:
        raise CorruptStateError(f"Invalid cart entry: {e}") from e

    return CartEntry(artwork=artwork, quantity=quantity)


def encode_cart(entries: Sequence[CartEntry]) -> str:
    return json.dumps([_entry_to_dict(entry) for entry in entries])


def decode_cart(raw: str) -> tuple[CartEntry, ...]:
    value = _load_json(raw)
    if not isinstance(value, list):
        raise CorruptStateError(f"Expected an array, got {type(value).__name__}")

    entries = tuple(_entry_from_dict(item) for item in value)

    ids = [entry.id for entry in entries]
    if len(ids) != len(set(ids)):
        raise CorruptStateError("Cart contains duplicate entries")

    return entries


# --- Favorites ---


def encode_favorites(ids: Sequence[str]) -> str:
    return json.dumps(list(ids))


def decode_favorites(raw: str) -> tuple[str, ...]:
    value = _load_json(raw)
    if not isinstance(value, list):
        raise CorruptStateError(f"Expected an array, got {type(value).__name__}")
    if not all(isinstance(item, str) for item in value):
        raise CorruptStateError("Favorites must be artwork id strings")

    # Keep first occurrence order
    return tuple(dict.fromkeys(value))

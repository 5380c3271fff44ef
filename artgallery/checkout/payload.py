"""
Checkout payload and processor line items.

The storefront sends the cart as a list of CheckoutItems; the relay turns
each one into a processor line item priced in minor currency units.
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from artgallery.models.cart import CartEntry


class CheckoutItem(BaseModel):
    """One cart line as sent to the checkout relay."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    artist: str = ""
    dimensions: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    price: Decimal = Field(..., ge=0)
    quantity: int | None = Field(default=1, ge=1)


def checkout_items_from_cart(entries: Sequence[CartEntry]) -> list[CheckoutItem]:
    return [
        CheckoutItem(
            title=entry.artwork.title,
            artist=entry.artwork.artist,
            dimensions=entry.artwork.dimensions,
            image_url=entry.artwork.image_url,
            price=entry.artwork.price,
            quantity=entry.quantity,
        )
        for entry in entries
    ]


def to_minor_units(price: Decimal) -> int:
    """Convert a major-unit price to cents, rounding half up."""
    return int((price * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _is_absolute_url(url: str | None) -> bool:
    return url is not None and url.startswith(("http://", "https://"))


def build_line_items(items: Sequence[CheckoutItem], currency: str) -> list[dict[str, Any]]:
    """
    Processor line items for a checkout session.

    Images are only attached when they are absolute URLs; the hosted
    payment page cannot resolve relative ones.
    """
    line_items: list[dict[str, Any]] = []
    for item in items:
        description = item.artist
        if item.dimensions:
            description = f"{item.artist} - {item.dimensions}"

        product_data: dict[str, Any] = {"name": item.title, "description": description}
        if _is_absolute_url(item.image_url):
            product_data["images"] = [item.image_url]

        line_items.append(
            {
                "price_data": {
                    "currency": currency,
                    "product_data": product_data,
                    "unit_amount": to_minor_units(item.price),
                },
                "quantity": item.quantity or 1,
            }
        )
    return line_items


def flatten_form(value: Any, prefix: str = "") -> dict[str, str]:
    """
    Flatten nested dicts and lists into bracketed form fields.

    {"a": [{"b": 1}]} becomes {"a[0][b]": "1"}.
    """
    fields: dict[str, str] = {}
    if isinstance(value, dict):
        for key, child in value.items():
            fields.update(flatten_form(child, f"{prefix}[{key}]" if prefix else str(key)))
    elif isinstance(value, list):
        for index, child in enumerate(value):
            fields.update(flatten_form(child, f"{prefix}[{index}]"))
    elif isinstance(value, bool):
        fields[prefix] = "true" if value else "false"
    elif value is not None:
        fields[prefix] = str(value)
    return fields

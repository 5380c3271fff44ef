from artgallery.checkout.payload import CheckoutItem, build_line_items, checkout_items_from_cart
from artgallery.checkout.service import (
    CheckoutOutcome,
    CheckoutReturn,
    checkout_cart,
    resolve_checkout_return,
)
from artgallery.checkout.stripe import (
    CheckoutError,
    CheckoutSession,
    StripeCheckoutClient,
    get_checkout_client,
)

__all__ = [
    "CheckoutError",
    "CheckoutItem",
    "CheckoutOutcome",
    "CheckoutReturn",
    "CheckoutSession",
    "StripeCheckoutClient",
    "build_line_items",
    "checkout_cart",
    "checkout_items_from_cart",
    "get_checkout_client",
    "resolve_checkout_return",
]

"""
Storefront checkout flow.

Turns the session's cart into a checkout request, and interprets the
shopper's return from the hosted payment page.

The return is trusted on the strength of its query flag alone: nothing here
asks the processor whether the charge actually went through. Responses say
so explicitly (``verified=False``) rather than implying a confirmed payment.
"""

import logging
from dataclasses import dataclass
from typing import Literal

from artgallery.checkout.payload import checkout_items_from_cart
from artgallery.checkout.stripe import CheckoutError, StripeCheckoutClient
from artgallery.state.container import SessionState

logger = logging.getLogger(__name__)

EMPTY_CART = "Cart is empty"

ReturnStatus = Literal["success", "canceled", "none"]


@dataclass(frozen=True)
class CheckoutOutcome:
    """Either a redirect URL or the error to show; never both."""

    url: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class CheckoutReturn:
    status: ReturnStatus
    verified: bool = False
    cart_cleared: bool = False


def checkout_urls(frontend_url: str) -> tuple[str, str]:
    """Success and cancel URLs on the storefront's cart page."""
    base = frontend_url.rstrip("/")
    return f"{base}/cart?success=true", f"{base}/cart?canceled=true"


async def checkout_cart(
    state: SessionState, client: StripeCheckoutClient, frontend_url: str
) -> CheckoutOutcome:
    """
    Start a hosted checkout for the session's cart.

    The cart is left untouched whatever happens, so a failed attempt can
    simply be retried.
    """
    if not state.cart:
        return CheckoutOutcome(error=EMPTY_CART)

    success_url, cancel_url = checkout_urls(frontend_url)
    items = checkout_items_from_cart(state.cart)

    try:
        session = await client.create_session(items, success_url, cancel_url)
    except CheckoutError as e:
        return CheckoutOutcome(error=e.message)

    return CheckoutOutcome(url=session.url)


def resolve_checkout_return(state: SessionState, success: bool, canceled: bool) -> CheckoutReturn:
    """
    Apply the shopper's return from the payment page.

    A success flag empties the cart. The flag is not checked against the
    processor's record of the charge.
    """
    if success:
        logger.warning("Checkout return marked successful without processor verification")
        state.clear_cart()
        return CheckoutReturn(status="success", verified=False, cart_cleared=True)

    if canceled:
        logger.info("Checkout canceled by shopper")
        return CheckoutReturn(status="canceled")

    return CheckoutReturn(status="none")

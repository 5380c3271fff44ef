"""
Checkout API endpoints.

``/api/create-checkout-session`` is the relay: it accepts a cart payload and
forwards it to the payment processor. ``/cart/checkout`` does the same for
the calling browser's own cart, and ``/cart/checkout/result`` handles the
shopper's return from the hosted payment page.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from artgallery.api.deps import get_current_user, get_state
from artgallery.checkout.payload import CheckoutItem
from artgallery.checkout.service import (
    EMPTY_CART,
    checkout_cart,
    checkout_urls,
    resolve_checkout_return,
)
from artgallery.checkout.stripe import (
    CONFIGURATION_ERROR,
    SESSION_FAILED,
    CheckoutError,
    StripeCheckoutClient,
    get_checkout_client,
)
from artgallery.config import settings
from artgallery.models.user import UserProfile
from artgallery.state.container import SessionState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])

INVALID_CART = "Invalid cart data"


class CheckoutResponse(BaseModel):
    """Redirect target on success, or the error to show the shopper."""

    url: str | None = None
    error: str | None = None


class CheckoutReturnResponse(BaseModel):
    status: str
    verified: bool = False
    cart_cleared: bool = False
    message: str


def _error(status_code: int, **content: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content)


@router.post("/api/create-checkout-session")
async def create_checkout_session(
    client: Annotated[StripeCheckoutClient, Depends(get_checkout_client)],
    payload: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """
    Relay a cart to the payment processor.

    Body: ``{"cart": [{title, artist, dimensions?, imageUrl?, price, quantity}]}``.
    Returns ``{"url"}`` or ``{"error"}`` with 400 for a bad cart and 500
    when the processor cannot create a session.
    """
    cart = (payload or {}).get("cart")
    if not isinstance(cart, list) or not cart:
        return _error(status.HTTP_400_BAD_REQUEST, error=INVALID_CART)

    try:
        items = [CheckoutItem.model_validate(item) for item in cart]
    except ValidationError as e:
        logger.warning("Rejected checkout payload: %s", e.error_count())
        return _error(status.HTTP_400_BAD_REQUEST, error=INVALID_CART)

    success_url, cancel_url = checkout_urls(settings.frontend_url)

    try:
        session = await client.create_session(items, success_url, cancel_url)
    except CheckoutError as e:
        if e.message == CONFIGURATION_ERROR:
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, error=CONFIGURATION_ERROR)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error=SESSION_FAILED,
            details=e.details or e.message,
            type=e.error_type,
        )

    return JSONResponse(content={"url": session.url})


@router.post(
    "/cart/checkout",
    response_model=CheckoutResponse,
    responses={400: {"model": CheckoutResponse}, 502: {"model": CheckoutResponse}},
)
async def checkout(
    state: Annotated[SessionState, Depends(get_state, scope="function")],
    client: Annotated[StripeCheckoutClient, Depends(get_checkout_client)],
    user: Annotated[UserProfile, Depends(get_current_user)],
) -> CheckoutResponse | JSONResponse:
    """
    Start checkout for the calling browser's cart. Requires sign-in.

    On failure the error is returned verbatim and the cart is kept.
    """
    outcome = await checkout_cart(state, client, settings.frontend_url)

    if not outcome.ok:
        logger.warning("Checkout failed for user %s: %s", user.id, outcome.error)
        status_code = (
            status.HTTP_400_BAD_REQUEST
            if outcome.error == EMPTY_CART
            else status.HTTP_502_BAD_GATEWAY
        )
        return _error(status_code, error=outcome.error)

    return CheckoutResponse(url=outcome.url)


@router.get("/cart/checkout/result", response_model=CheckoutReturnResponse)
async def checkout_result(
    state: Annotated[SessionState, Depends(get_state, scope="function")],
    success: bool = False,
    canceled: bool = False,
) -> CheckoutReturnResponse:
    """
    Handle the return from the hosted payment page.

    The success flag is taken at face value; the payment itself is not
    confirmed with the processor, which ``verified=false`` reports.
    """
    result = resolve_checkout_return(state, success=success, canceled=canceled)

    messages = {
        "success": "Thank you for your purchase!",
        "canceled": "Checkout was canceled. Your cart has been kept.",
        "none": "",
    }

    return CheckoutReturnResponse(
        status=result.status,
        verified=result.verified,
        cart_cleared=result.cart_cleared,
        message=messages[result.status],
    )

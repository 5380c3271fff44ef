"""
Payment processor client.

Creates hosted checkout sessions through the processor's REST API. The
shopper is redirected to the returned URL and comes back to the cart page
with ``success=true`` or ``canceled=true``.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from artgallery.checkout.payload import CheckoutItem, build_line_items, flatten_form
from artgallery.config import settings
from artgallery.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

CONFIGURATION_ERROR = "Stripe configuration error. Please check server logs."
SESSION_FAILED = "Failed to create checkout session"


class CheckoutError(KnownError):
    """
    Checkout session creation failed.

    ``message`` is the text to show the shopper; ``details`` and
    ``error_type`` carry the processor's own error when there is one.
    """

    def __init__(
        self,
        message: str,
        details: str | None = None,
        error_type: str | None = None,
        status_code: int = 502,
    ):
        self.details = details
        self.error_type = error_type
        super().__init__(
            kind=FailureKind.CHECKOUT_FAILED,
            message=message,
            detail=details,
            suggestion="Your cart has been kept. Please try again.",
            status_code=status_code,
        )


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


def _processor_error(response: httpx.Response) -> CheckoutError:
    try:
        error = response.json().get("error") or {}
    except ValueError:
        error = {}

    if isinstance(error, str):
        return CheckoutError(error, details=error)

    message = error.get("message") or error.get("code") or SESSION_FAILED
    return CheckoutError(message, details=error.get("message"), error_type=error.get("type"))


class StripeCheckoutClient:
    """Client for the processor's checkout sessions endpoint."""

    def __init__(
        self,
        secret_key: str | None = None,
        api_base: str | None = None,
        currency: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.secret_key = secret_key if secret_key is not None else settings.stripe_secret_key
        self.api_base = (api_base or settings.stripe_api_base).rstrip("/")
        self.currency = currency or settings.checkout_currency
        self.timeout = timeout or settings.http_timeout

    @property
    def configured(self) -> bool:
        return bool(self.secret_key)

    async def create_session(
        self,
        items: Sequence[CheckoutItem],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """
        Create a hosted checkout session for the given items.

        Raises:
            CheckoutError: If no secret key is configured, the processor is
                unreachable, or it rejects the request
        """
        if not self.configured:
            logger.error("Missing Stripe secret key in environment variables")
            raise CheckoutError(CONFIGURATION_ERROR, status_code=500)

        form = flatten_form(
            {
                "mode": "payment",
                "payment_method_types": ["card"],
                "line_items": build_line_items(items, self.currency),
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_base}/v1/checkout/sessions",
                    data=form,
                    auth=(self.secret_key, ""),
                )
        except httpx.HTTPError as e:
            logger.error("Stripe request failed: %s", e)
            raise CheckoutError(SESSION_FAILED, details=str(e)) from e

        if response.is_error:
            error = _processor_error(response)
            logger.error("Stripe API error (%s): %s", error.error_type, error.message)
            raise error

        data = response.json()
        logger.info("Stripe session created successfully: %s", data.get("id"))
        return CheckoutSession(id=data["id"], url=data["url"])


# Default client instance
_client: StripeCheckoutClient | None = None


def get_checkout_client() -> StripeCheckoutClient:
    """
    Get the default checkout client instance.

    Returns:
        Singleton StripeCheckoutClient instance
    """
    global _client
    if _client is None:
        _client = StripeCheckoutClient()
    return _client

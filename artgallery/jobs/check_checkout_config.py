"""
Check that the payment processor is configured.

Reports whether a secret key is present without printing it. Exits with
status 1 when checkout cannot work.
"""

import logging

from artgallery.config import Settings, settings

logger = logging.getLogger(__name__)

SECRET_KEY_PREFIX = "sk_"


def check_checkout_config(config: Settings | None = None) -> bool:
    """
    Log the state of the checkout configuration.

    Returns:
        True if a secret key is configured
    """
    config = config or settings
    key = config.stripe_secret_key

    logger.info("Checking Stripe configuration...")
    logger.info("STRIPE_SECRET_KEY present: %s", bool(key))

    if not key:
        logger.error("No Stripe secret key found in the environment")
        logger.error("Add it to .env as STRIPE_SECRET_KEY=sk_test_your_test_key")
        return False

    if not key.startswith(SECRET_KEY_PREFIX):
        logger.warning(
            'STRIPE_SECRET_KEY does not start with "%s"; it may not be a secret key',
            SECRET_KEY_PREFIX,
        )

    logger.info("Stripe configuration check complete (currency: %s)", config.checkout_currency)
    return True


def main() -> None:
    """CLI entry point for the configuration check."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not check_checkout_config():
        raise SystemExit(1)


if __name__ == "__main__":
    main()

"""
Job to seed an empty hosted catalog with the sample artworks.

Writes with the service key, so row-level policies do not apply. Does
nothing when the artworks table already has rows.
"""

import asyncio
import logging

from artgallery.catalog.client import CatalogClient, CatalogError
from artgallery.config import ARTWORKS_TABLE, settings
from artgallery.services.sample_catalog import get_sample_artworks

logger = logging.getLogger(__name__)


async def seed_catalog(client: CatalogClient | None = None) -> int:
    """
    Insert the sample artworks if the catalog is empty.

    Returns:
        Number of artworks inserted
    """
    if client is None:
        client = CatalogClient(api_key=settings.supabase_service_key)

    existing = await client.count(ARTWORKS_TABLE)
    if existing:
        logger.info("Catalog already has %d artworks, nothing to seed", existing)
        return 0

    inserted = 0
    for artwork in get_sample_artworks():
        row = await client.insert(ARTWORKS_TABLE, artwork.to_row())
        logger.info("Seeded %s (%s)", artwork.title, row.get("id"))
        inserted += 1

    logger.info("Seeding complete. Inserted %d artworks", inserted)
    return inserted


def main() -> None:
    """CLI entry point for seeding the catalog."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        asyncio.run(seed_catalog())
    except CatalogError as e:
        logger.error("Seeding failed: %s (%s)", e.message, e.detail)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()

"""
Gallery queries over the catalog snapshot.

Filtering, search and sorting work on an in-memory list of artworks; the
featured query goes to the remote catalog because it needs its own
ordering and limit.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import Literal

from artgallery.catalog.client import CatalogClient, CatalogError
from artgallery.models.artwork import Artwork

logger = logging.getLogger(__name__)

SortOrder = Literal["newest", "price_asc", "price_desc", "title"]


def filter_artworks(
    artworks: Iterable[Artwork],
    category: str | None = None,
    query: str | None = None,
) -> list[Artwork]:
    """
    Artworks in ``category`` whose title, artist or description contains ``query``.

    Both matches are case-insensitive; None skips that filter.
    """
    results = list(artworks)

    if category:
        wanted = category.lower()
        results = [a for a in results if (a.category or "").lower() == wanted]

    if query:
        needle = query.lower()
        results = [
            a
            for a in results
            if needle in a.title.lower()
            or needle in a.artist.lower()
            or needle in a.description.lower()
        ]

    return results


def sort_artworks(artworks: Sequence[Artwork], order: SortOrder = "newest") -> list[Artwork]:
    """Sort artworks. "newest" keeps the catalog's own order (newest first)."""
    if order == "price_asc":
        return sorted(artworks, key=lambda a: a.price)
    if order == "price_desc":
        return sorted(artworks, key=lambda a: a.price, reverse=True)
    if order == "title":
        return sorted(artworks, key=lambda a: a.title.lower())
    return list(artworks)


def categories(artworks: Iterable[Artwork]) -> list[str]:
    """Distinct categories present in the catalog, sorted."""
    return sorted({a.category for a in artworks if a.category})


def resolve_favorites(artworks: Iterable[Artwork], favorite_ids: Sequence[str]) -> list[Artwork]:
    """
    Artworks for the favorite ids, in the order they were favorited.

    Ids no longer in the catalog are left out.
    """
    by_id = {a.id: a for a in artworks}
    return [by_id[fid] for fid in favorite_ids if fid in by_id]


async def featured_artworks(client: CatalogClient, limit: int) -> list[Artwork]:
    """
    Artworks for the home page.

    Artworks flagged as featured come first; when there are none, or the
    featured query fails, the most recent artworks are shown instead.
    """
    try:
        featured = await client.list_artworks(featured=True, limit=limit, order=None)
    except CatalogError as e:
        logger.warning("Featured artworks query failed, falling back to recent: %s", e.message)
        featured = []

    if featured:
        return featured

    return await client.list_artworks(limit=limit)

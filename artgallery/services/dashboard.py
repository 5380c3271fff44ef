"""
Admin dashboard figures.

Counts come straight from the hosted catalog; nothing is cached.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from artgallery.catalog.client import CatalogClient
from artgallery.config import (
    ARTWORKS_TABLE,
    DASHBOARD_RECENT_LIMIT,
    ORDERS_TABLE,
    PROFILES_TABLE,
)


@dataclass
class DashboardStats:
    """Headline numbers for the admin panel."""

    artwork_count: int
    user_count: int
    order_count: int
    recent_artworks: list[dict[str, Any]] = field(default_factory=list)


async def build_dashboard(client: CatalogClient) -> DashboardStats:
    """Gather counts and the most recently added artworks."""
    artwork_count, user_count, order_count, recent = await asyncio.gather(
        client.count(ARTWORKS_TABLE),
        client.count(PROFILES_TABLE),
        client.count(ORDERS_TABLE),
        client.select(
            ARTWORKS_TABLE,
            columns="id,title,created_at",
            order="created_at",
            limit=DASHBOARD_RECENT_LIMIT,
        ),
    )
    return DashboardStats(
        artwork_count=artwork_count,
        user_count=user_count,
        order_count=order_count,
        recent_artworks=recent,
    )

from artgallery.services.dashboard import DashboardStats, build_dashboard
from artgallery.services.gallery import (
    SortOrder,
    categories,
    featured_artworks,
    filter_artworks,
    resolve_favorites,
    sort_artworks,
)
from artgallery.services.sample_catalog import SAMPLE_ARTWORKS, get_sample_artworks

__all__ = [
    "SAMPLE_ARTWORKS",
    "DashboardStats",
    "SortOrder",
    "build_dashboard",
    "categories",
    "featured_artworks",
    "filter_artworks",
    "get_sample_artworks",
    "resolve_favorites",
    "sort_artworks",
]

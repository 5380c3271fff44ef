from artgallery.catalog.cache import CatalogCache, get_catalog_cache
from artgallery.catalog.client import CatalogClient, CatalogError, get_catalog_client
from artgallery.catalog.feed import ChangeEvent, ChangeFeed, get_change_feed
from artgallery.catalog.identity import (
    AuthSession,
    IdentityClient,
    IdentityError,
    get_identity_client,
)

__all__ = [
    "AuthSession",
    "CatalogCache",
    "CatalogClient",
    "CatalogError",
    "ChangeEvent",
    "ChangeFeed",
    "IdentityClient",
    "IdentityError",
    "get_catalog_cache",
    "get_catalog_client",
    "get_change_feed",
    "get_identity_client",
]

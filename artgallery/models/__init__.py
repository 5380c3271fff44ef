from artgallery.models.artwork import Artwork, InvalidArtworkError, parse_price
from artgallery.models.cart import CartEntry, cart_count, cart_total
from artgallery.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
)
from artgallery.models.site_settings import SiteSettings
from artgallery.models.user import ADMIN_ROLE, UserProfile

__all__ = [
    "ADMIN_ROLE",
    "ApiResponse",
    "Artwork",
    "CartEntry",
    "FailureDetail",
    "FailureKind",
    "InvalidArtworkError",
    "KnownError",
    "OutcomeType",
    "SiteSettings",
    "UserProfile",
    "cart_count",
    "cart_total",
    "parse_price",
]

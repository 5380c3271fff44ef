from artgallery.api.admin import router as admin_router
from artgallery.api.auth import router as auth_router
from artgallery.api.catalog import router as catalog_router
from artgallery.api.checkout import router as checkout_router
from artgallery.api.health import router as health_router
from artgallery.api.hooks import router as hooks_router
from artgallery.api.session import router as session_router

__all__ = [
    "admin_router",
    "auth_router",
    "catalog_router",
    "checkout_router",
    "health_router",
    "hooks_router",
    "session_router",
]

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from artgallery.api import (
    admin_router,
    auth_router,
    catalog_router,
    checkout_router,
    health_router,
    hooks_router,
    session_router,
)
from artgallery.catalog.cache import get_catalog_cache
from artgallery.config import settings
from artgallery.db.database import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    await get_catalog_cache().ensure_loaded()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("artgallery"),
    lifespan=lifespan,
)

app.include_router(admin_router)
app.include_router(auth_router)
app.include_router(catalog_router)
app.include_router(checkout_router)
app.include_router(health_router)
app.include_router(hooks_router)
app.include_router(session_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,  # session cookie
    allow_methods=["*"],
    allow_headers=["*"],
)

"""
Health check endpoints.

Liveness and readiness probes. Readiness checks the state database and
reports whether the catalog snapshot has been fetched.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.catalog.cache import CatalogCache, get_catalog_cache
from artgallery.db.database import get_session

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    catalog: str | None = None
    catalog_error: str | None = None


def _catalog_status(catalog: CatalogCache) -> str:
    if catalog.error:
        return "error"
    return "loaded" if catalog.loaded else "pending"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    catalog: Annotated[CatalogCache, Depends(get_catalog_cache)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the database is unavailable. A catalog that failed to
    load is reported but does not fail the probe; the storefront still
    serves carts and favorites without it.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")

    return HealthResponse(
        status="ready",
        database="connected",
        catalog=_catalog_status(catalog),
        catalog_error=catalog.error,
    )

"""
Catalog API endpoints.

Gallery listing, search and the home page's featured artworks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from artgallery.api.deps import get_state, raise_for_failure
from artgallery.catalog.client import CatalogClient, get_catalog_client
from artgallery.config import FEATURED_LIMIT, settings
from artgallery.models.artwork import Artwork
from artgallery.models.failure import KnownError
from artgallery.services.gallery import (
    SortOrder,
    categories,
    featured_artworks,
    filter_artworks,
    sort_artworks,
)
from artgallery.state.container import SessionState

router = APIRouter(prefix="/artworks", tags=["catalog"])


class ArtworkResponse(BaseModel):
    """Response model for a single artwork."""

    id: str
    title: str
    artist: str
    description: str = ""
    price: float
    image_url: str
    dimensions: str | None = None
    medium: str | None = None
    category: str | None = None
    year: str | None = None
    featured: bool = False
    quantity: int = 1
    in_cart: bool = False
    is_favorite: bool = False


class ArtworkListResponse(BaseModel):
    """Response model for a list of artworks."""

    artworks: list[ArtworkResponse]
    count: int
    categories: list[str] = Field(default_factory=list)
    error: str | None = Field(
        default=None,
        description="Set when the catalog could not be fetched; artworks may be stale or empty",
    )


def artwork_response(artwork: Artwork, state: SessionState | None = None) -> ArtworkResponse:
    return ArtworkResponse(
        id=artwork.id,
        title=artwork.title,
        artist=artwork.artist,
        description=artwork.description,
        price=float(artwork.price),
        image_url=artwork.display_image_url(settings.placeholder_image_url),
        dimensions=artwork.dimensions,
        medium=artwork.medium,
        category=artwork.category,
        year=artwork.year,
        featured=artwork.featured,
        quantity=artwork.quantity,
        in_cart=state.is_in_cart(artwork.id) if state else False,
        is_favorite=state.is_in_favorites(artwork.id) if state else False,
    )


@router.get("", response_model=ArtworkListResponse)
async def list_artworks(
    state: Annotated[SessionState, Depends(get_state, scope="function")],
    category: str | None = None,
    q: Annotated[str | None, Query(max_length=200)] = None,
    sort: SortOrder = "newest",
) -> ArtworkListResponse:
    """
    Browse the gallery.

    Served from the catalog snapshot. If the last fetch failed, the error
    is returned alongside whatever snapshot is held.
    """
    matches = sort_artworks(filter_artworks(state.artworks, category=category, query=q), sort)

    return ArtworkListResponse(
        artworks=[artwork_response(a, state) for a in matches],
        count=len(matches),
        categories=categories(state.artworks),
        error=state.catalog_error,
    )


@router.get("/featured", response_model=ArtworkListResponse)
async def list_featured_artworks(
    client: Annotated[CatalogClient, Depends(get_catalog_client)],
    limit: Annotated[int, Query(ge=1, le=12)] = FEATURED_LIMIT,
) -> ArtworkListResponse:
    """Featured artworks for the home page, or the most recent ones."""
    try:
        artworks = await featured_artworks(client, limit)
    except KnownError as e:
        return ArtworkListResponse(artworks=[], count=0, error=e.message)

    return ArtworkListResponse(
        artworks=[artwork_response(a) for a in artworks],
        count=len(artworks),
    )


@router.get("/{artwork_id}", response_model=ArtworkResponse)
async def get_artwork(
    artwork_id: str,
    state: Annotated[SessionState, Depends(get_state, scope="function")],
    client: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> ArtworkResponse:
    """
    Get a single artwork.

    Looks in the snapshot first and asks the catalog for anything newer.
    Returns 404 if the artwork does not exist.
    """
    artwork = state.find_artwork(artwork_id)

    if artwork is None:
        try:
            artwork = await client.get_artwork(artwork_id)
        except KnownError as e:
            raise_for_failure(e)

    if artwork is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Artwork '{artwork_id}' not found",
        )

    return artwork_response(artwork, state)

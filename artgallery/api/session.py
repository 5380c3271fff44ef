"""
Session API endpoints.

Cart, favorites and the dark-mode preference of the calling browser.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from artgallery.api.catalog import ArtworkResponse, artwork_response
from artgallery.api.deps import get_state
from artgallery.services.gallery import resolve_favorites
from artgallery.state.container import SessionState

router = APIRouter(tags=["session"])


class CartItemResponse(BaseModel):
    """One cart line."""

    artwork: ArtworkResponse
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    """Response model for the cart."""

    items: list[CartItemResponse]
    total: float
    count: int = Field(description="Total units across all lines")


class FavoritesResponse(BaseModel):
    """Favorite ids, plus the artworks still present in the catalog."""

    ids: list[str]
    artworks: list[ArtworkResponse]


class SessionResponse(BaseModel):
    """Everything the layout needs on page load."""

    status: str
    dark_mode: bool
    cart: CartResponse
    favorites: list[str]
    catalog_error: str | None = None


class DarkModeResponse(BaseModel):
    dark_mode: bool


class AddToCartRequest(BaseModel):
    artwork_id: str = Field(..., min_length=1)


class QuantityUpdateRequest(BaseModel):
    quantity: int = Field(..., ge=1, description="New quantity; at least 1")


def cart_response(state: SessionState) -> CartResponse:
    return CartResponse(
        items=[
            CartItemResponse(
                artwork=artwork_response(entry.artwork, state),
                quantity=entry.quantity,
                line_total=float(entry.line_total),
            )
            for entry in state.cart
        ],
        total=float(state.cart_total),
        count=state.cart_count,
    )


def favorites_response(state: SessionState) -> FavoritesResponse:
    artworks = resolve_favorites(state.artworks, state.favorites)
    return FavoritesResponse(
        ids=list(state.favorites),
        artworks=[artwork_response(a, state) for a in artworks],
    )


@router.get("/session", response_model=SessionResponse)
async def get_session_state(
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> SessionResponse:
    return SessionResponse(
        status=state.status.value,
        dark_mode=state.dark_mode,
        cart=cart_response(state),
        favorites=list(state.favorites),
        catalog_error=state.catalog_error,
    )


@router.post("/session/dark-mode/toggle", response_model=DarkModeResponse)
async def toggle_dark_mode(
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> DarkModeResponse:
    return DarkModeResponse(dark_mode=state.toggle_dark_mode())


# --- Cart ---


@router.get("/cart", response_model=CartResponse)
async def get_cart(
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> CartResponse:
    return cart_response(state)


@router.post("/cart/items", response_model=CartResponse)
async def add_cart_item(
    request: AddToCartRequest,
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> CartResponse:
    """
    Add one unit of an artwork to the cart.

    The artwork is snapshotted from the catalog; returns 404 if it is not
    in the catalog.
    """
    artwork = state.find_artwork(request.artwork_id)
    if artwork is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Artwork '{request.artwork_id}' not found",
        )

    state.add_to_cart(artwork)
    return cart_response(state)


@router.patch("/cart/items/{artwork_id}", response_model=CartResponse)
async def update_cart_item(
    artwork_id: str,
    request: QuantityUpdateRequest,
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> CartResponse:
    """Set a line's quantity. Unknown ids leave the cart unchanged."""
    state.update_cart_item_quantity(artwork_id, request.quantity)
    return cart_response(state)


@router.delete("/cart/items/{artwork_id}", response_model=CartResponse)
async def remove_cart_item(
    artwork_id: str,
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> CartResponse:
    state.remove_from_cart(artwork_id)
    return cart_response(state)


# --- Favorites ---


@router.get("/favorites", response_model=FavoritesResponse)
async def get_favorites(
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> FavoritesResponse:
    return favorites_response(state)


@router.put("/favorites/{artwork_id}", response_model=FavoritesResponse)
async def add_favorite(
    artwork_id: str,
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> FavoritesResponse:
    state.add_to_favorites(artwork_id)
    return favorites_response(state)


@router.delete("/favorites/{artwork_id}", response_model=FavoritesResponse)
async def remove_favorite(
    artwork_id: str,
    state: Annotated[SessionState, Depends(get_state, scope="function")],
) -> FavoritesResponse:
    state.remove_from_favorites(artwork_id)
    return favorites_response(state)

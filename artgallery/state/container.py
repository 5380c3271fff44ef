"""
Session state container.

Single source of truth for one browsing session: the cart, the favorite
artwork ids and the dark-mode preference, plus read access to the shared
catalog snapshot. Views receive the container through dependency injection;
nothing here is global.

Mutations are synchronous. Each one computes its result from the container's
current state, re-encodes the affected slice and marks it pending; ``save()``
writes pending slices to storage. Derived values (cart total, cart count) are
recomputed from the full entry list on every cart mutation.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from decimal import Decimal
from enum import Enum
from typing import TypeVar

from artgallery.catalog.cache import CatalogCache
from artgallery.models.artwork import Artwork
from artgallery.models.cart import CartEntry, cart_count, cart_total
from artgallery.state.codec import (
    CART_KEY,
    DARK_MODE_KEY,
    FAVORITES_KEY,
    CorruptStateError,
    decode_cart,
    decode_dark_mode,
    decode_favorites,
    encode_cart,
    encode_dark_mode,
    encode_favorites,
)
from artgallery.state.storage import StateStorage

logger = logging.getLogger(__name__)

S = TypeVar("S")


class ContainerStatus(str, Enum):
    INITIALIZING = "initializing"
    READY = "ready"


class SessionState:
    """Cart, favorites and display preference of one browsing session."""

    def __init__(self, storage: StateStorage, catalog: CatalogCache | None = None) -> None:
        self._storage = storage
        self._catalog = catalog

        self._dark_mode = False
        self._cart: tuple[CartEntry, ...] = ()
        self._cart_total = Decimal("0")
        self._cart_count = 0
        self._favorites: tuple[str, ...] = ()

        # key -> encoded payload waiting for save()
        self._pending: dict[str, str] = {}

        self.status = ContainerStatus.INITIALIZING

    # --- Loading and saving ---

    async def load(self, prefers_dark: bool = False) -> None:
        """
        Load all persisted slices and the catalog snapshot concurrently.

        A corrupt slice falls back to its default and its record is removed;
        the other slices are unaffected. Catalog fetch failures are recorded
        on the catalog cache, not raised.
        """
        dark_mode, cart, favorites, _ = await asyncio.gather(
            self._load_slice(DARK_MODE_KEY, decode_dark_mode, prefers_dark),
            self._load_slice(CART_KEY, decode_cart, ()),
            self._load_slice(FAVORITES_KEY, decode_favorites, ()),
            self._load_catalog(),
        )

        self._dark_mode = dark_mode
        self._apply_cart(cart)
        self._favorites = favorites
        self.status = ContainerStatus.READY

    async def _load_slice(self, key: str, decode: Callable[[str], S], default: S) -> S:
        raw = await self._storage.read(key)
        if raw is None:
            return default

        try:
            return decode(raw)
        except CorruptStateError as e:
            logger.warning("Discarding corrupt %s record: %s", key, e)
            await self._storage.remove(key)
            return default

    async def _load_catalog(self) -> None:
        if self._catalog is not None:
            await self._catalog.ensure_loaded()

    async def save(self) -> None:
        """Write every slice changed since the last save."""
        pending, self._pending = self._pending, {}
        for key, payload in pending.items():
            await self._storage.write(key, payload)

    @property
    def has_unsaved_changes(self) -> bool:
        return bool(self._pending)

    # --- Dark mode ---

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    def toggle_dark_mode(self) -> bool:
        self._dark_mode = not self._dark_mode
        self._pending[DARK_MODE_KEY] = encode_dark_mode(self._dark_mode)
        return self._dark_mode

    # --- Cart ---

    @property
    def cart(self) -> tuple[CartEntry, ...]:
        return self._cart

    @property
    def cart_total(self) -> Decimal:
        return self._cart_total

    @property
    def cart_count(self) -> int:
        return self._cart_count

    def _apply_cart(self, cart: tuple[CartEntry, ...]) -> None:
        self._cart = cart
        self._cart_total = cart_total(cart)
        self._cart_count = cart_count(cart)

    def _set_cart(self, cart: tuple[CartEntry, ...]) -> None:
        self._apply_cart(cart)
        self._pending[CART_KEY] = encode_cart(cart)

    def add_to_cart(self, artwork: Artwork) -> None:
        """Add one unit; an artwork already in the cart gets its quantity bumped."""
        for index, entry in enumerate(self._cart):
            if entry.id == artwork.id:
                bumped = replace(entry, quantity=entry.quantity + 1)
                self._set_cart(self._cart[:index] + (bumped,) + self._cart[index + 1 :])
                return

        self._set_cart(self._cart + (CartEntry(artwork=artwork, quantity=1),))

    def remove_from_cart(self, artwork_id: str) -> None:
        if not self.is_in_cart(artwork_id):
            return
        self._set_cart(tuple(entry for entry in self._cart if entry.id != artwork_id))

    def update_cart_item_quantity(self, artwork_id: str, quantity: int) -> None:
        """
        Set an entry's quantity verbatim.

        No clamping happens here: callers keep quantities at 1 or more.
        """
        if not self.is_in_cart(artwork_id):
            return
        self._set_cart(
            tuple(
                replace(entry, quantity=quantity) if entry.id == artwork_id else entry
                for entry in self._cart
            )
        )

    def clear_cart(self) -> None:
        self._set_cart(())

    def is_in_cart(self, artwork_id: str) -> bool:
        return any(entry.id == artwork_id for entry in self._cart)

    # --- Favorites ---

    @property
    def favorites(self) -> tuple[str, ...]:
        return self._favorites

    def add_to_favorites(self, artwork_id: str) -> None:
        if artwork_id in self._favorites:
            return
        self._set_favorites(self._favorites + (artwork_id,))

    def remove_from_favorites(self, artwork_id: str) -> None:
        if artwork_id not in self._favorites:
            return
        self._set_favorites(tuple(fid for fid in self._favorites if fid != artwork_id))

    def is_in_favorites(self, artwork_id: str) -> bool:
        return artwork_id in self._favorites

    def _set_favorites(self, favorites: tuple[str, ...]) -> None:
        self._favorites = favorites
        self._pending[FAVORITES_KEY] = encode_favorites(favorites)

    # --- Catalog ---

    @property
    def artworks(self) -> tuple[Artwork, ...]:
        if self._catalog is None:
            return ()
        return self._catalog.artworks

    @property
    def catalog_error(self) -> str | None:
        if self._catalog is None:
            return None
        return self._catalog.error

    def find_artwork(self, artwork_id: str) -> Artwork | None:
        return next((a for a in self.artworks if a.id == artwork_id), None)

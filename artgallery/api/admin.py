"""
Admin panel API endpoints.

Every route requires an administrator. Writes go to the hosted catalog as
the signed-in administrator, and artwork writes are announced on the
change feed so the storefront's snapshot refreshes.
"""

import logging
from decimal import Decimal
from pathlib import PurePosixPath
from typing import Annotated, Any, Literal
from uuid import uuid4

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel, Field

from artgallery.api.catalog import ArtworkResponse, artwork_response
from artgallery.api.deps import AdminContext, raise_for_failure, require_admin
from artgallery.catalog.feed import ChangeEvent, ChangeFeed, get_change_feed
from artgallery.config import (
    ARTWORK_IMAGES_FOLDER,
    ARTWORKS_BUCKET,
    ARTWORKS_TABLE,
    PROFILES_TABLE,
    SITE_SETTINGS_TABLE,
)
from artgallery.models.artwork import Artwork
from artgallery.models.failure import KnownError
from artgallery.models.site_settings import SiteSettings
from artgallery.models.user import ADMIN_ROLE, DEFAULT_ROLE
from artgallery.services.dashboard import build_dashboard

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

SITE_SETTINGS_ID = 1

Role = Literal["user", "admin"]


# --- Models ---


class RecentArtwork(BaseModel):
    id: str
    title: str | None = None
    created_at: str | None = None


class DashboardResponse(BaseModel):
    """Headline numbers for the admin panel."""

    artwork_count: int
    user_count: int
    order_count: int
    recent_artworks: list[RecentArtwork]


class ArtworkWriteRequest(BaseModel):
    """Artwork fields as entered in the admin form."""

    title: str = Field(..., min_length=1)
    artist: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    description: str = ""
    image_url: str | None = None
    dimensions: str | None = None
    medium: str | None = None
    category: str | None = None
    year: str | None = None
    featured: bool = False
    quantity: int = Field(default=1, ge=0)


class ArtworkPatchRequest(BaseModel):
    """Partial update; only the fields present in the request are changed."""

    title: str | None = Field(default=None, min_length=1)
    artist: str | None = Field(default=None, min_length=1)
    price: Decimal | None = Field(default=None, ge=0)
    description: str | None = None
    image_url: str | None = None
    dimensions: str | None = None
    medium: str | None = None
    category: str | None = None
    year: str | None = None
    featured: bool | None = None
    quantity: int | None = Field(default=None, ge=0)


class ImageUploadResponse(BaseModel):
    url: str
    path: str


class ProfileResponse(BaseModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str = DEFAULT_ROLE
    created_at: str | None = None


class RoleUpdateRequest(BaseModel):
    role: Role


def artwork_row(fields: dict[str, Any]) -> dict[str, Any]:
    """Map request fields to the artworks table's column names."""
    row = dict(fields)
    if "image_url" in row:
        row["imageUrl"] = row.pop("image_url")
    if "price" in row and row["price"] is not None:
        row["price"] = float(row["price"])
    return row


def profile_response(row: dict[str, Any]) -> ProfileResponse:
    return ProfileResponse(
        id=str(row["id"]),
        email=row.get("email"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        role=row.get("role") or DEFAULT_ROLE,
        created_at=row.get("created_at"),
    )


async def announce(feed: ChangeFeed, change_type: str, record: dict[str, Any] | None) -> None:
    await feed.publish(ChangeEvent(table=ARTWORKS_TABLE, type=change_type, record=record))


# --- Dashboard ---


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    admin: Annotated[AdminContext, Depends(require_admin)],
) -> DashboardResponse:
    try:
        stats = await build_dashboard(admin.catalog)
    except KnownError as e:
        raise_for_failure(e)

    return DashboardResponse(
        artwork_count=stats.artwork_count,
        user_count=stats.user_count,
        order_count=stats.order_count,
        recent_artworks=[
            RecentArtwork(
                id=str(row["id"]),
                title=row.get("title"),
                created_at=row.get("created_at"),
            )
            for row in stats.recent_artworks
        ],
    )


# --- Artworks ---


@router.get("/artworks", response_model=list[ArtworkResponse])
async def list_artworks(
    admin: Annotated[AdminContext, Depends(require_admin)],
) -> list[ArtworkResponse]:
    """All artworks, read straight from the catalog rather than the snapshot."""
    try:
        artworks = await admin.catalog.list_artworks()
    except KnownError as e:
        raise_for_failure(e)

    return [artwork_response(a) for a in artworks]


@router.post("/artworks", response_model=ArtworkResponse, status_code=status.HTTP_201_CREATED)
async def create_artwork(
    request: ArtworkWriteRequest,
    admin: Annotated[AdminContext, Depends(require_admin)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
) -> ArtworkResponse:
    try:
        row = await admin.catalog.insert(ARTWORKS_TABLE, artwork_row(request.model_dump()))
    except KnownError as e:
        raise_for_failure(e)

    logger.info("Artwork %s created by %s", row.get("id"), admin.user.id)
    await announce(feed, "INSERT", row)
    return artwork_response(Artwork.from_row(row))


@router.put("/artworks/{artwork_id}", response_model=ArtworkResponse)
async def update_artwork(
    artwork_id: str,
    request: ArtworkPatchRequest,
    admin: Annotated[AdminContext, Depends(require_admin)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
) -> ArtworkResponse:
    """Update the fields present in the request. Returns 404 for unknown ids."""
    patch = artwork_row(request.model_dump(exclude_unset=True))
    if not patch:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update",
        )

    try:
        row = await admin.catalog.update(ARTWORKS_TABLE, artwork_id, patch)
    except KnownError as e:
        raise_for_failure(e)

    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Artwork '{artwork_id}' not found",
        )

    logger.info("Artwork %s updated by %s", artwork_id, admin.user.id)
    await announce(feed, "UPDATE", row)
    return artwork_response(Artwork.from_row(row))


@router.delete("/artworks/{artwork_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_artwork(
    artwork_id: str,
    admin: Annotated[AdminContext, Depends(require_admin)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
) -> None:
    try:
        await admin.catalog.delete(ARTWORKS_TABLE, artwork_id)
    except KnownError as e:
        raise_for_failure(e)

    logger.info("Artwork %s deleted by %s", artwork_id, admin.user.id)
    await announce(feed, "DELETE", {"id": artwork_id})


@router.post(
    "/artworks/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_artwork_image(
    admin: Annotated[AdminContext, Depends(require_admin)],
    file: Annotated[UploadFile, File()],
) -> ImageUploadResponse:
    """
    Store an artwork image and return its public URL.

    Files get a random name under the artwork images folder; the original
    extension is kept.
    """
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image files can be uploaded",
        )

    suffix = PurePosixPath(file.filename or "").suffix.lower()
    path = f"{ARTWORK_IMAGES_FOLDER}/{uuid4().hex}{suffix}"
    content = await file.read()

    try:
        url = await admin.catalog.upload(ARTWORKS_BUCKET, path, content, content_type)
    except KnownError as e:
        raise_for_failure(e)

    logger.info("Uploaded %d bytes to %s/%s", len(content), ARTWORKS_BUCKET, path)
    return ImageUploadResponse(url=url, path=path)


# --- Site settings ---


@router.get("/settings", response_model=SiteSettings, response_model_by_alias=True)
async def get_site_settings(
    admin: Annotated[AdminContext, Depends(require_admin)],
) -> SiteSettings:
    """Stored settings, or the defaults when none have been saved."""
    try:
        row = await admin.catalog.get_single(SITE_SETTINGS_TABLE, {"id": SITE_SETTINGS_ID})
    except KnownError as e:
        raise_for_failure(e)

    if row is None:
        return SiteSettings()
    return SiteSettings.model_validate(row)


@router.put("/settings", response_model=SiteSettings, response_model_by_alias=True)
async def update_site_settings(
    request: SiteSettings,
    admin: Annotated[AdminContext, Depends(require_admin)],
) -> SiteSettings:
    """Save the settings row, creating it on first save."""
    values = request.model_dump(by_alias=True)

    try:
        existing = await admin.catalog.get_single(
            SITE_SETTINGS_TABLE, {"id": SITE_SETTINGS_ID}
        )
        if existing is None:
            row = await admin.catalog.insert(
                SITE_SETTINGS_TABLE, {**values, "id": SITE_SETTINGS_ID}
            )
        else:
            row = await admin.catalog.update(SITE_SETTINGS_TABLE, SITE_SETTINGS_ID, values)
    except KnownError as e:
        raise_for_failure(e)

    logger.info("Site settings saved by %s", admin.user.id)
    return SiteSettings.model_validate(row) if row else request


# --- Users ---


@router.get("/users", response_model=list[ProfileResponse])
async def list_users(
    admin: Annotated[AdminContext, Depends(require_admin)],
) -> list[ProfileResponse]:
    try:
        rows = await admin.catalog.select(PROFILES_TABLE, order="created_at")
    except KnownError as e:
        raise_for_failure(e)

    return [profile_response(row) for row in rows]


@router.put("/users/{user_id}/role", response_model=ProfileResponse)
async def update_user_role(
    user_id: str,
    request: RoleUpdateRequest,
    admin: Annotated[AdminContext, Depends(require_admin)],
) -> ProfileResponse:
    """Change a user's role in the profiles table."""
    if user_id == admin.user.id and request.role != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Administrators cannot remove their own admin role",
        )

    try:
        row = await admin.catalog.update(PROFILES_TABLE, user_id, {"role": request.role})
    except KnownError as e:
        raise_for_failure(e)

    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User '{user_id}' not found",
        )

    logger.info("Role of user %s set to %s by %s", user_id, request.role, admin.user.id)
    return profile_response(row)

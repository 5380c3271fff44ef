"""
Hosted catalog client.

Talks to the hosted backend's REST interface for table rows and to its
object storage for uploaded images. Rows are filtered with the backend's
query-string operators (``column=eq.value``, ``order=column.desc``).
"""

import logging
from typing import Any

import httpx

from artgallery.config import ARTWORKS_TABLE, settings
from artgallery.models.artwork import Artwork, InvalidArtworkError
from artgallery.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)


class CatalogError(KnownError):
    """A request to the hosted catalog failed."""

    def __init__(self, message: str, detail: str | None = None, status_code: int = 502):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=message,
            detail=detail,
            suggestion="Reload the page to try again.",
            status_code=status_code,
        )


def error_message(response: httpx.Response) -> str:
    """Pull a readable message out of a hosted backend error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if isinstance(data, dict):
        for field in ("message", "msg", "error_description", "error"):
            value = data.get(field)
            if isinstance(value, str) and value:
                return value
    return f"HTTP {response.status_code}"


class CatalogClient:
    """
    Client for catalog tables and file storage on the hosted backend.

    Requests carry the project's API key. When an access token is given
    (an administrator acting through the admin panel) it is sent as the
    bearer credential so row-level policies apply to that user.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.access_token = access_token
        self.timeout = timeout or settings.http_timeout

    def with_token(self, access_token: str) -> "CatalogClient":
        """Copy of this client acting as the given user."""
        return CatalogClient(
            base_url=self.base_url,
            api_key=self.api_key,
            access_token=access_token,
            timeout=self.timeout,
        )

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    content=content,
                    headers=self._headers(headers),
                )
        except httpx.HTTPError as e:
            logger.error("Catalog request %s %s failed: %s", method, path, e)
            raise CatalogError("Could not reach the catalog service", detail=str(e)) from e

        if response.is_error:
            message = error_message(response)
            logger.error(
                "Catalog request %s %s returned %d: %s",
                method,
                path,
                response.status_code,
                message,
            )
            raise CatalogError(message, detail=f"HTTP {response.status_code}")

        return response

    # --- Rows ---

    async def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        descending: bool = True,
        limit: int | None = None,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Select rows matching equality filters."""
        params = {"select": columns}
        for column, value in (filters or {}).items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            params[column] = f"eq.{value}"
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)

        response = await self._request("GET", f"/rest/v1/{table}", params=params)
        return list(response.json())

    async def get_single(
        self, table: str, filters: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """First matching row, or None when there is none."""
        rows = await self.select(table, filters=filters, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        response = await self._request(
            "POST",
            f"/rest/v1/{table}",
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows:
            raise CatalogError(f"Insert into {table} returned no row")
        return dict(rows[0])

    async def update(
        self, table: str, row_id: str | int, patch: dict[str, Any]
    ) -> dict[str, Any] | None:
        """
        Apply a partial update to one row.

        Returns the updated row, or None if no row has that id.
        """
        response = await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params={"id": f"eq.{row_id}"},
            json=patch,
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        return dict(rows[0]) if rows else None

    async def delete(self, table: str, row_id: str | int) -> None:
        await self._request("DELETE", f"/rest/v1/{table}", params={"id": f"eq.{row_id}"})

    async def count(self, table: str) -> int:
        """Exact row count, read from the Content-Range header."""
        response = await self._request(
            "HEAD",
            f"/rest/v1/{table}",
            params={"select": "*"},
            headers={"Prefer": "count=exact"},
        )
        content_range = response.headers.get("content-range", "")
        _, _, total = content_range.partition("/")
        if not total.isdigit():
            raise CatalogError(
                f"Count of {table} unavailable", detail=f"Content-Range: {content_range!r}"
            )
        return int(total)

    # --- Artworks ---

    async def list_artworks(
        self,
        *,
        featured: bool | None = None,
        limit: int | None = None,
        order: str | None = "created_at",
    ) -> list[Artwork]:
        """
        Artworks, newest first by default.

        Rows that cannot be read as artworks are skipped with a warning.
        """
        filters = {"featured": featured} if featured is not None else None
        rows = await self.select(ARTWORKS_TABLE, filters=filters, order=order, limit=limit)
        return rows_to_artworks(rows)

    async def get_artwork(self, artwork_id: str) -> Artwork | None:
        row = await self.get_single(ARTWORKS_TABLE, filters={"id": artwork_id})
        if row is None:
            return None
        try:
            return Artwork.from_row(row)
        except InvalidArtworkError as e:
            raise CatalogError(f"Artwork '{artwork_id}' could not be read", detail=str(e)) from e

    # --- Storage ---

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """Upload (or overwrite) an object and return its public URL."""
        await self._request(
            "POST",
            f"/storage/v1/object/{bucket}/{path}",
            content=content,
            headers={
                "Content-Type": content_type,
                "Cache-Control": "3600",
                "x-upsert": "true",
            },
        )
        return self.public_url(bucket, path)


def rows_to_artworks(rows: list[dict[str, Any]]) -> list[Artwork]:
    artworks: list[Artwork] = []
    for row in rows:
        try:
            artworks.append(Artwork.from_row(row))
        except (InvalidArtworkError, TypeError, ValueError) as e:
            logger.warning("Skipping unreadable artwork row %s: %s", row.get("id"), e)
    return artworks


# Default client instance
_client: CatalogClient | None = None


def get_catalog_client() -> CatalogClient:
    """
    Get the default catalog client instance.

    Returns:
        Singleton CatalogClient instance
    """
    global _client
    if _client is None:
        _client = CatalogClient()
    return _client

"""
Hosted identity client.

Sessions, sign-in, sign-up and profile updates are owned by the hosted
backend's auth service. The application only ever holds a read-only
UserProfile projection and delegates every change back to this client.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from artgallery.catalog.client import error_message
from artgallery.config import settings
from artgallery.models.failure import FailureKind, KnownError
from artgallery.models.user import UserProfile

logger = logging.getLogger(__name__)


class IdentityError(KnownError):
    """A request to the identity service failed."""

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
        detail: str | None = None,
        status_code: int = 502,
    ):
        super().__init__(kind=kind, message=message, detail=detail, status_code=status_code)


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued at sign-in, with the signed-in user."""

    access_token: str
    refresh_token: str | None
    expires_in: int | None
    user: UserProfile


class IdentityClient:
    """Client for the hosted backend's auth endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.timeout = timeout or settings.http_timeout

    async def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
        failure_message: str,
        failure_kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
        failure_status: int = 502,
    ) -> httpx.Response:
        headers = {"apikey": self.api_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}/auth/v1{path}",
                    params=params,
                    json=json,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error("Identity request %s %s failed: %s", method, path, e)
            raise IdentityError("Could not reach the sign-in service", detail=str(e)) from e

        if response.is_error:
            detail = error_message(response)
            logger.warning(
                "Identity request %s %s returned %d: %s",
                method,
                path,
                response.status_code,
                detail,
            )
            raise IdentityError(
                failure_message,
                kind=failure_kind,
                detail=detail,
                status_code=failure_status,
            )

        return response

    async def get_user(self, access_token: str) -> UserProfile:
        """Resolve an access token to the user it belongs to."""
        response = await self._request(
            "GET",
            "/user",
            access_token=access_token,
            failure_message="Your session has expired. Please sign in again.",
            failure_kind=FailureKind.UNAUTHORIZED,
            failure_status=401,
        )
        return UserProfile.from_auth_user(response.json())

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            failure_message="Invalid email or password",
            failure_kind=FailureKind.UNAUTHORIZED,
            failure_status=401,
        )
        data = response.json()
        return AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            user=UserProfile.from_auth_user(data["user"]),
        )

    async def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        redirect_to: str | None = None,
    ) -> UserProfile:
        """
        Create an account.

        The provider sends a verification email that links back to
        ``redirect_to``.
        """
        params = {"redirect_to": redirect_to} if redirect_to else None
        response = await self._request(
            "POST",
            "/signup",
            params=params,
            json={
                "email": email,
                "password": password,
                "data": {
                    "first_name": first_name,
                    "last_name": last_name,
                    "full_name": f"{first_name} {last_name}",
                },
            },
            failure_message="Failed to create account",
            failure_kind=FailureKind.INVALID_INPUT,
            failure_status=400,
        )
        data = response.json()
        # With email confirmation enabled the user comes back bare, otherwise inside a session
        return UserProfile.from_auth_user(data.get("user") or data)

    async def sign_out(self, access_token: str) -> None:
        await self._request(
            "POST",
            "/logout",
            access_token=access_token,
            failure_message="Failed to sign out",
        )

    async def update_user(self, access_token: str, data: dict[str, Any]) -> UserProfile:
        """Merge ``data`` into the user's metadata."""
        response = await self._request(
            "PUT",
            "/user",
            access_token=access_token,
            json={"data": data},
            failure_message="Failed to update account",
        )
        return UserProfile.from_auth_user(response.json())

    async def resend_verification(self, email: str) -> None:
        await self._request(
            "POST",
            "/resend",
            json={"type": "signup", "email": email},
            failure_message="Failed to send verification email",
        )


# Default client instance
_client: IdentityClient | None = None


def get_identity_client() -> IdentityClient:
    """
    Get the default identity client instance.

    Returns:
        Singleton IdentityClient instance
    """
    global _client
    if _client is None:
        _client = IdentityClient()
    return _client

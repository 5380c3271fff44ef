"""Tests for account endpoints."""

from typing import Any

import pytest
from httpx import AsyncClient

from artgallery.catalog.identity import AuthSession, IdentityError, get_identity_client
from artgallery.main import app
from artgallery.models.failure import FailureKind
from artgallery.models.user import UserProfile


class FakeIdentity:
    """In-memory identity provider with one account."""

    def __init__(self) -> None:
        self.user = UserProfile(
            id="user-1",
            email="ana@example.com",
            first_name="Ana",
            last_name="Ruiz",
        )
        self.signed_out: list[str] = []
        self.updates: list[dict[str, Any]] = []
        self.resent: list[str] = []
        self.sign_up_redirect: str | None = None

    async def get_user(self, access_token: str) -> UserProfile:
        if access_token != "valid-token":
            raise IdentityError(
                "Your session has expired. Please sign in again.",
                kind=FailureKind.UNAUTHORIZED,
                status_code=401,
            )
        return self.user

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        if password != "secret1":
            raise IdentityError(
                "Invalid email or password", kind=FailureKind.UNAUTHORIZED, status_code=401
            )
        return AuthSession(
            access_token="valid-token", refresh_token="refresh", expires_in=3600, user=self.user
        )

    async def sign_up(self, email, password, first_name, last_name, redirect_to=None) -> UserProfile:
        self.sign_up_redirect = redirect_to
        return UserProfile(id="user-2", email=email, first_name=first_name, last_name=last_name)

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)

    async def update_user(self, access_token: str, data: dict[str, Any]) -> UserProfile:
        self.updates.append(data)
        return UserProfile(
            id=self.user.id,
            email=self.user.email,
            first_name=data["first_name"],
            last_name=data["last_name"],
        )

    async def resend_verification(self, email: str) -> None:
        self.resent.append(email)


@pytest.fixture
def identity(client: AsyncClient) -> FakeIdentity:
    fake = FakeIdentity()
    app.dependency_overrides[get_identity_client] = lambda: fake
    return fake


class TestSignIn:
    async def test_returns_tokens(self, client: AsyncClient, identity: FakeIdentity) -> None:
        """Valid credentials return tokens and the user."""
        response = await client.post(
            "/auth/sign-in", json={"email": "ana@example.com", "password": "secret1"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"] == "valid-token"
        assert data["user"]["email"] == "ana@example.com"
        assert data["user"]["is_admin"] is False

    async def test_invalid_credentials(self, client: AsyncClient, identity: FakeIdentity) -> None:
        """Wrong credentials return 401 with a classified failure."""
        response = await client.post(
            "/auth/sign-in", json={"email": "ana@example.com", "password": "nope"}
        )

        assert response.status_code == 401
        detail = response.json()["detail"]
        assert detail["kind"] == "unauthorized"
        assert detail["message"] == "Invalid email or password"


class TestSignUp:
    async def test_creates_account(self, client: AsyncClient, identity: FakeIdentity) -> None:
        """Sign-up returns the new user and links back to verify-email."""
        response = await client.post(
            "/auth/sign-up",
            json={
                "email": "bo@example.com",
                "password": "secret1",
                "first_name": "Bo",
                "last_name": "Lee",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "bo@example.com"
        assert data["verification_email_sent"] is True
        assert identity.sign_up_redirect is not None
        assert identity.sign_up_redirect.endswith("/verify-email")

    async def test_short_password(self, client: AsyncClient, identity: FakeIdentity) -> None:
        """Passwords shorter than six characters are rejected."""
        response = await client.post(
            "/auth/sign-up",
            json={"email": "bo@example.com", "password": "123", "first_name": "B", "last_name": "L"},
        )

        assert response.status_code == 422


class TestAccount:
    async def test_me(
        self, client: AsyncClient, identity: FakeIdentity, auth_headers: dict[str, str]
    ) -> None:
        """Returns the signed-in user."""
        response = await client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["first_name"] == "Ana"

    async def test_me_requires_token(self, client: AsyncClient, identity: FakeIdentity) -> None:
        """Requests without a bearer token are unauthorized."""
        response = await client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Please sign in to continue"

    async def test_me_expired_token(self, client: AsyncClient, identity: FakeIdentity) -> None:
        """Rejected tokens are unauthorized."""
        response = await client.get("/auth/me", headers={"Authorization": "Bearer stale"})

        assert response.status_code == 401
        assert response.json()["detail"]["kind"] == "unauthorized"

    async def test_update_name(
        self, client: AsyncClient, identity: FakeIdentity, auth_headers: dict[str, str]
    ) -> None:
        """Name changes go to the identity provider."""
        response = await client.put(
            "/auth/me",
            json={"first_name": "Anna", "last_name": "Ruiz"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["first_name"] == "Anna"
        assert identity.updates[0]["full_name"] == "Anna Ruiz"

    async def test_sign_out(
        self, client: AsyncClient, identity: FakeIdentity, auth_headers: dict[str, str]
    ) -> None:
        """Signing out revokes the presented token."""
        response = await client.post("/auth/sign-out", headers=auth_headers)

        assert response.status_code == 204
        assert identity.signed_out == ["valid-token"]

    async def test_resend_verification(
        self, client: AsyncClient, identity: FakeIdentity, auth_headers: dict[str, str]
    ) -> None:
        """Unverified users can ask for the email again."""
        response = await client.post("/auth/verification", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Verification email sent"
        assert identity.resent == ["ana@example.com"]

from decimal import Decimal
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from artgallery.catalog.cache import CatalogCache, get_catalog_cache
from artgallery.catalog.client import CatalogError, get_catalog_client
from artgallery.catalog.identity import IdentityError, get_identity_client
from artgallery.checkout.stripe import CheckoutError, CheckoutSession, get_checkout_client
from artgallery.config import settings
from artgallery.db.database import get_session
from artgallery.main import app
from artgallery.models.artwork import Artwork
from artgallery.models.db import Base
from artgallery.models.failure import FailureKind
from artgallery.models.user import UserProfile


class StubCatalogClient:
    """Serves a fixed artwork list in place of the hosted catalog."""

    def __init__(self, artworks: list[Artwork] | None = None) -> None:
        self.artworks = list(artworks or [])
        self.error: CatalogError | None = None
        self.calls = 0

    async def list_artworks(self, **kwargs: Any) -> list[Artwork]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.artworks)

    async def get_artwork(self, artwork_id: str) -> Artwork | None:
        return next((a for a in self.artworks if a.id == artwork_id), None)


@pytest.fixture
def painting() -> Artwork:
    """An oil painting priced with cents."""
    return Artwork(
        id="art-1",
        title="Harbor at Dusk",
        artist="Mara Lind",
        price=Decimal("1200.50"),
        description="Boats resting in a quiet harbor",
        image_url="https://cdn.example.com/harbor.jpg",
        dimensions='24" x 36"',
        medium="Oil on Canvas",
        category="painting",
        year="2021",
        featured=True,
    )


@pytest.fixture
def sculpture() -> Artwork:
    return Artwork(
        id="art-2",
        title="Bronze Heron",
        artist="Tomas Ek",
        price=Decimal("950"),
        description="Cast bronze bird on a slate base",
        medium="Bronze",
        category="sculpture",
        quantity=3,
    )


@pytest.fixture
def stub_catalog(painting: Artwork, sculpture: Artwork) -> StubCatalogClient:
    return StubCatalogClient([painting, sculpture])


@pytest.fixture
def catalog_cache(stub_catalog: StubCatalogClient) -> CatalogCache:
    """A cache over the stub catalog; loads on first use."""
    return CatalogCache(stub_catalog)  # type: ignore[arg-type]


class StubIdentityClient:
    """Accepts a single known access token."""

    def __init__(self, user: UserProfile) -> None:
        self.user = user
        self.token = "valid-token"

    async def get_user(self, access_token: str) -> UserProfile:
        if access_token != self.token:
            raise IdentityError(
                "Your session has expired. Please sign in again.",
                kind=FailureKind.UNAUTHORIZED,
                status_code=401,
            )
        return self.user


class StubCheckoutClient:
    """Returns a fixed session, or raises the configured error."""

    def __init__(self) -> None:
        self.error: CheckoutError | None = None
        self.items: list[Any] = []

    async def create_session(self, items, success_url, cancel_url) -> CheckoutSession:
        self.items = list(items)
        if self.error is not None:
            raise self.error
        return CheckoutSession(id="cs_test", url="https://pay.test/cs_test")


@pytest.fixture
def shopper() -> UserProfile:
    return UserProfile(id="user-1", email="ana@example.com", first_name="Ana", last_name="Ruiz")


@pytest.fixture
def stub_identity(shopper: UserProfile) -> StubIdentityClient:
    return StubIdentityClient(shopper)


@pytest.fixture
def stub_checkout() -> StubCheckoutClient:
    return StubCheckoutClient()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer valid-token"}


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(
    async_engine,
    catalog_cache: CatalogCache,
    stub_catalog: StubCatalogClient,
    stub_identity: StubIdentityClient,
    stub_checkout: StubCheckoutClient,
):
    """Provide an async test client with the database and remote services replaced."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_catalog_cache] = lambda: catalog_cache
    app.dependency_overrides[get_catalog_client] = lambda: stub_catalog
    app.dependency_overrides[get_identity_client] = lambda: stub_identity
    app.dependency_overrides[get_checkout_client] = lambda: stub_checkout

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={settings.session_cookie_name: "test-session-0001"},
    ) as client:
        yield client

    app.dependency_overrides.clear()

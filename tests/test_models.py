"""Tests for domain models."""

from decimal import Decimal

import pytest

from artgallery.models.artwork import Artwork, InvalidArtworkError, parse_price
from artgallery.models.cart import CartEntry, cart_count, cart_total
from artgallery.models.failure import FailureKind, KnownError, OutcomeType
from artgallery.models.site_settings import SiteSettings
from artgallery.models.user import UserProfile


class TestParsePrice:
    def test_float_keeps_decimal_digits(self) -> None:
        """Floats go through str so 19.99 stays exactly 19.99."""
        assert parse_price(19.99) == Decimal("19.99")

    def test_accepts_numeric_string(self) -> None:
        """Numeric strings are parsed."""
        assert parse_price("1200") == Decimal("1200")

    @pytest.mark.parametrize("value", [None, True, "abc", -1, "NaN", "Infinity"])
    def test_rejects_invalid_values(self, value: object) -> None:
        """Missing, boolean, non-numeric, negative and non-finite prices are rejected."""
        with pytest.raises(InvalidArtworkError):
            parse_price(value)


class TestArtworkFromRow:
    def test_reads_camel_case_image_url(self) -> None:
        """Rows written by the admin form use imageUrl."""
        artwork = Artwork.from_row(
            {"id": 7, "title": "Dunes", "artist": "A", "price": 10, "imageUrl": "/a.jpg"}
        )

        assert artwork.id == "7"
        assert artwork.image_url == "/a.jpg"

    def test_reads_snake_case_image_url_and_type(self) -> None:
        """Older rows use image_url and type."""
        artwork = Artwork.from_row(
            {
                "id": "x",
                "title": "Dunes",
                "artist": "A",
                "price": "10",
                "image_url": "/b.jpg",
                "type": "print",
            }
        )

        assert artwork.image_url == "/b.jpg"
        assert artwork.category == "print"

    def test_defaults(self) -> None:
        """Quantity defaults to 1, featured to False, year is kept as text."""
        artwork = Artwork.from_row({"id": "x", "price": 5, "year": 1999})

        assert artwork.quantity == 1
        assert artwork.featured is False
        assert artwork.year == "1999"
        assert artwork.title == ""

    def test_missing_id_rejected(self) -> None:
        """A row without an id is not an artwork."""
        with pytest.raises(InvalidArtworkError):
            Artwork.from_row({"title": "No id", "price": 5})

    @pytest.mark.parametrize("quantity", [float("inf"), float("nan"), "many"])
    def test_unreadable_quantity_rejected(self, quantity: object) -> None:
        """Quantities that are not whole numbers make the row unreadable."""
        with pytest.raises(InvalidArtworkError):
            Artwork.from_row({"id": "x", "price": 5, "quantity": quantity})

    def test_to_row_uses_table_column_names(self, painting: Artwork) -> None:
        """Insert payloads use imageUrl and a numeric price."""
        row = painting.to_row()

        assert row["imageUrl"] == painting.image_url
        assert row["price"] == 1200.5
        assert "id" not in row

    def test_display_image_url_falls_back_to_placeholder(self, sculpture: Artwork) -> None:
        """Artworks without an image show the placeholder."""
        assert sculpture.display_image_url("/placeholder.png") == "/placeholder.png"


class TestCart:
    def test_line_total(self, painting: Artwork) -> None:
        """Line total is price times quantity."""
        entry = CartEntry(artwork=painting, quantity=2)

        assert entry.line_total == Decimal("2401.00")

    def test_total_and_count(self, painting: Artwork, sculpture: Artwork) -> None:
        """Total sums line totals; count sums quantities."""
        entries = [CartEntry(painting, 1), CartEntry(sculpture, 2)]

        assert cart_total(entries) == Decimal("3100.50")
        assert cart_count(entries) == 3

    def test_empty_cart(self) -> None:
        """An empty cart totals zero."""
        assert cart_total([]) == Decimal("0")
        assert cart_count([]) == 0


class TestUserProfile:
    def test_from_auth_user(self) -> None:
        """Role and names come from user metadata."""
        user = UserProfile.from_auth_user(
            {
                "id": "u1",
                "email": "ana@example.com",
                "role": "authenticated",
                "email_confirmed_at": "2024-01-01T00:00:00Z",
                "user_metadata": {"role": "admin", "first_name": "Ana", "last_name": "Ruiz"},
            }
        )

        assert user.is_admin
        assert user.is_email_verified
        assert user.first_name == "Ana"

    def test_provider_role_is_not_application_role(self) -> None:
        """The provider's "authenticated" role does not leak into the profile."""
        user = UserProfile.from_auth_user({"id": "u1", "role": "authenticated"})

        assert user.role == "user"
        assert not user.is_admin
        assert not user.is_email_verified

    def test_with_role(self) -> None:
        """with_role copies the profile with a new role, defaulting to user."""
        user = UserProfile(id="u1", email="a@b.c")

        assert user.with_role("admin").is_admin
        assert user.with_role(None).role == "user"
        assert user.with_role("admin").email == "a@b.c"


class TestSiteSettings:
    def test_defaults(self) -> None:
        """Unsaved settings have the storefront defaults."""
        settings = SiteSettings()

        assert settings.site_name == "Art Gallery"
        assert settings.featured_artworks_count == 6
        assert settings.enable_sales is True
        assert settings.maintenance_mode is False

    def test_camel_case_round_trip(self) -> None:
        """Stored rows use camelCase column names."""
        settings = SiteSettings.model_validate({"siteName": "North Gallery", "maintenanceMode": True})

        assert settings.site_name == "North Gallery"
        assert settings.model_dump(by_alias=True)["maintenanceMode"] is True

    def test_featured_count_bounds(self) -> None:
        """Featured count must be between 1 and 12."""
        with pytest.raises(ValueError):
            SiteSettings(featured_artworks_count=0)


class TestKnownError:
    def test_to_response(self) -> None:
        """Known errors convert to a known-failure envelope."""
        error = KnownError(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="Catalog unavailable",
            suggestion="Reload the page to try again.",
            status_code=502,
        )

        response = error.to_response()

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.EXTERNAL_API_ERROR
        assert response.failure.message == "Catalog unavailable"
        assert error.status_code == 502

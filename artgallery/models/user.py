from dataclasses import dataclass
from typing import Any

ADMIN_ROLE = "admin"
DEFAULT_ROLE = "user"


@dataclass(frozen=True)
class UserProfile:
    """
    Read-only projection of an identity session.

    The identity provider owns the record; changes go through its
    update operation, never through this object.
    """

    id: str
    email: str | None = None
    role: str = DEFAULT_ROLE
    email_verified_at: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def is_email_verified(self) -> bool:
        return self.email_verified_at is not None

    @classmethod
    def from_auth_user(cls, payload: dict[str, Any]) -> "UserProfile":
        """
        Build a profile from the identity provider's user object.

        The provider's top-level ``role`` is its own audience marker
        ("authenticated"), so the application role is read from user metadata.
        """
        metadata = payload.get("user_metadata") or {}
        return cls(
            id=str(payload["id"]),
            email=payload.get("email"),
            role=metadata.get("role") or DEFAULT_ROLE,
            email_verified_at=payload.get("email_confirmed_at"),
            first_name=metadata.get("first_name"),
            last_name=metadata.get("last_name"),
        )

    def with_role(self, role: str | None) -> "UserProfile":
        """Copy of this profile carrying the role recorded in the profiles table."""
        return UserProfile(
            id=self.id,
            email=self.email,
            role=role or DEFAULT_ROLE,
            email_verified_at=self.email_verified_at,
            first_name=self.first_name,
            last_name=self.last_name,
        )

"""
Session context passed explicitly into the engine.

Replaces ambient global auth state: each engine instance is bound to the
Session it was constructed with, so several sessions can coexist.
"""

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_USER_NAME = "SmartNotes User"


class UserProfile(BaseModel):
    """Signed-in user as exposed by the identity provider."""

    id: str = Field(..., description="Owner id used to scope note rows")
    email: str = Field(default="", description="Login e-mail")
    name: str = Field(default=DEFAULT_USER_NAME, description="Display name")
    avatar_url: str | None = Field(default=None, description="Public avatar URL")

    @classmethod
    def from_auth_user(cls, user: dict[str, Any]) -> "UserProfile":
        """
        Build a profile from an identity-provider user payload.

        Args:
            user: Payload with id, email and optional user_metadata
                (full_name, avatar_url)
        """
        metadata = user.get("user_metadata") or {}
        return cls(
            id=user["id"],
            email=user.get("email") or "",
            name=metadata.get("full_name") or DEFAULT_USER_NAME,
            avatar_url=metadata.get("avatar_url"),
        )


class Session(BaseModel):
    """Authenticated session, or an anonymous one when user is None."""

    user: UserProfile | None = None
    access_token: str | None = None

    @property
    def owner_id(self) -> str | None:
        """Owner id for note rows, None when nobody is signed in."""
        return self.user.id if self.user else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

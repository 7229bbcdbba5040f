"""
Signed-in identity.

The dashboard has no local user table. An Identity is what the identity
provider returned at sign-in; it is kept in the browser session and handed
to DRF as request.user by SessionIdentityAuthentication.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any

DEFAULT_DISPLAY_NAME = "User"


@dataclass(frozen=True)
class Identity:
    """
    Authenticated user as known to the identity provider.

    Attributes:
        uid: Provider user id; owner key of every media record and collection.
        email: Sign-in email.
        id_token: Bearer token for document store requests; expires an hour
            after sign-in.
        display_name: Optional profile name.
    """

    uid: str
    email: str
    id_token: str
    display_name: str | None = None

    # DRF permission classes check these on request.user
    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> str:
        return self.uid

    @property
    def name(self) -> str:
        """Display name, falling back to a generic label."""
        return self.display_name or DEFAULT_DISPLAY_NAME

    def to_session(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_session(cls, data: dict[str, Any] | None) -> Identity | None:
        if not data or not data.get("uid") or not data.get("id_token"):
            return None
        return cls(
            uid=data["uid"],
            email=data.get("email", ""),
            id_token=data["id_token"],
            display_name=data.get("display_name"),
        )

    def __str__(self) -> str:
        return self.email or self.uid

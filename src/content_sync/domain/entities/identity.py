"""
Identity Entities - who is talking to the content service.

Key Entities:
    - Role: Authorization level reported by the server
    - Identity: An authenticated (or attributed) user
    - LoginResult: Credential + identity returned by a successful login
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(Enum):
    """User roles. Client-side checks are advisory only."""

    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"

    @classmethod
    def parse(cls, value: Any) -> Role:
        try:
            return cls(value)
        except ValueError:
            return cls.GUEST


@dataclass(frozen=True, slots=True)
class Identity:
    """
    A user as reported by ``/auth/me`` or embedded in articles/comments.

    Attributes:
        id: Server-side user id
        display_name: Username shown in the UI
        role: Authorization level
        email: Contact address (may be empty for anonymous commenters)
        avatar: Avatar URL
        created_at: Server timestamp string
        updated_at: Server timestamp string
    """

    id: int
    display_name: str
    role: Role = Role.GUEST
    email: str = ""
    avatar: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Identity:
        """Create Identity from the wire format."""
        return cls(
            id=data.get("id", 0),
            display_name=data.get("username") or data.get("display_name") or "",
            role=Role.parse(data.get("role")),
            email=data.get("email") or "",
            avatar=data.get("avatar") or None,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass(frozen=True, slots=True)
class LoginResult:
    """Successful login payload."""

    credential: str
    identity: Identity

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoginResult:
        return cls(
            credential=data["token"],
            identity=Identity.from_dict(data.get("user") or {}),
        )

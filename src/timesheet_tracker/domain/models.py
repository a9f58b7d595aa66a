"""Domain models for users."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    username: str
    email: str
    password_hash: str
    is_admin: bool
    created_at: datetime | None = None


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity carried by a verified access token."""

    id: int
    username: str
    email: str
    is_admin: bool

"""Admin domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AdminUser:
    """Minimal admin view of a user."""

    id: int
    username: str
    email: str
    is_admin: bool
    created_at: datetime | None


@dataclass(frozen=True)
class RecordCounts:
    """Clock record counts for a single user."""

    total: int = 0
    completed: int = 0

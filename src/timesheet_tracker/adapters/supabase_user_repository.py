"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from timesheet_tracker.adapters.supabase_errors import (
    UNIQUE_VIOLATION,
    is_violation,
    storage_error,
)
from timesheet_tracker.domain.errors import StorageError, ValidationError
from timesheet_tracker.domain.models import UserRecord
from timesheet_tracker.services.users import UserRepository

_COLUMNS = "id, username, email, password_hash, is_admin, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with the given id, if present."""
        return self._find_one("id", user_id)

    def get_by_login(self, login: str) -> UserRecord | None:
        """Return the user matching a username first, then an email."""
        return self._find_one("username", login) or self._find_one("email", login)

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create a user through the register_user database function.

        The function grants the admin flag only when the users table is empty,
        inside the same transaction as the insert.
        """
        try:
            response = self.client.rpc(
                "register_user",
                {
                    "p_username": username,
                    "p_email": email,
                    "p_password_hash": password_hash,
                },
            ).execute()
        except APIError as exc:
            if is_violation(exc, UNIQUE_VIOLATION):
                raise ValidationError("Username or email already exists") from exc
            raise storage_error(exc, "create user") from exc
        rows = response.data if isinstance(response.data, list) else [response.data]
        if not rows or not rows[0]:
            raise StorageError("Failed to create user")
        return _parse_row(rows[0])

    def _find_one(self, column: str, value: object) -> UserRecord | None:
        try:
            response = (
                self.client.table("users")
                .select(_COLUMNS)
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "load user") from exc
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        email=str(row["email"]),
        password_hash=str(row.get("password_hash") or ""),
        is_admin=bool(row.get("is_admin")),
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
    )

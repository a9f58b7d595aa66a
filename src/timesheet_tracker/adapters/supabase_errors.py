"""Translation of PostgREST failures into domain errors."""

from postgrest.exceptions import APIError

from timesheet_tracker.domain.errors import StorageError

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def is_violation(exc: APIError, code: str) -> bool:
    """Return True when the PostgREST error carries the given SQLSTATE."""
    return str(exc.code) == code


def storage_error(exc: APIError, action: str) -> StorageError:
    """Wrap a PostgREST error without leaking database details."""
    return StorageError(f"Failed to {action}: {exc.code}")

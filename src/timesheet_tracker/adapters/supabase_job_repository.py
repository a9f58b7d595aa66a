"""Supabase-backed job repository."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from timesheet_tracker.adapters.supabase_errors import (
    FOREIGN_KEY_VIOLATION,
    is_violation,
    storage_error,
)
from timesheet_tracker.domain.errors import (
    DeleteConflictError,
    JobNotFoundError,
    StorageError,
)
from timesheet_tracker.domain.jobs import Job
from timesheet_tracker.services.jobs import JobRepository

_COLUMNS = "id, user_id, name, description, hourly_rate, created_at"


@dataclass
class SupabaseJobRepository(JobRepository):
    """Supabase implementation for jobs."""

    client: Client

    def list_jobs(self, user_id: int) -> list[Job]:
        """Return the user's jobs, newest first."""
        try:
            response = (
                self.client.table("jobs")
                .select(_COLUMNS)
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .order("id", desc=True)
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "list jobs") from exc
        return [_parse_row(row) for row in response.data or []]

    def get_job(self, job_id: int, user_id: int) -> Job | None:
        """Return a job when it exists and belongs to the user."""
        try:
            response = (
                self.client.table("jobs")
                .select(_COLUMNS)
                .eq("id", job_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "load job") from exc
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_job(
        self, user_id: int, name: str, description: str | None, hourly_rate: float
    ) -> Job:
        """Create a job row and return it."""
        try:
            response = (
                self.client.table("jobs")
                .insert(
                    {
                        "user_id": user_id,
                        "name": name,
                        "description": description,
                        "hourly_rate": hourly_rate,
                    }
                )
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "create job") from exc
        if not response.data:
            raise StorageError("Failed to create job")
        return _parse_row(response.data[0])

    def update_job(
        self,
        job_id: int,
        user_id: int,
        name: str,
        description: str | None,
        hourly_rate: float,
    ) -> Job:
        """Update a job row owned by the user and return it."""
        try:
            response = (
                self.client.table("jobs")
                .update(
                    {
                        "name": name,
                        "description": description,
                        "hourly_rate": hourly_rate,
                    }
                )
                .eq("id", job_id)
                .eq("user_id", user_id)
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "update job") from exc
        if not response.data:
            raise JobNotFoundError
        return _parse_row(response.data[0])

    def count_records(self, job_id: int) -> int:
        """Return how many clock records reference the job."""
        try:
            response = (
                self.client.table("clock_records")
                .select("id", count="exact")
                .eq("job_id", job_id)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "count job records") from exc
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def delete_job(self, job_id: int, user_id: int) -> None:
        """Delete a job row; the restricting foreign key guards history."""
        try:
            self.client.table("jobs").delete().eq("id", job_id).eq(
                "user_id", user_id
            ).execute()
        except APIError as exc:
            if is_violation(exc, FOREIGN_KEY_VIOLATION):
                raise DeleteConflictError(
                    "Cannot delete job with existing clock records"
                ) from exc
            raise storage_error(exc, "delete job") from exc


def _parse_row(row: dict[str, object]) -> Job:
    created_raw = row.get("created_at")
    return Job(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        name=str(row["name"]),
        description=row.get("description"),
        hourly_rate=float(row.get("hourly_rate") or 0.0),
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
    )

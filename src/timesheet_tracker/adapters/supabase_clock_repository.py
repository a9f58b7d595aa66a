"""Supabase-backed clock record repository."""

from dataclasses import dataclass
from datetime import date, datetime, time

from postgrest.exceptions import APIError
from supabase import Client

from timesheet_tracker.adapters.supabase_errors import (
    FOREIGN_KEY_VIOLATION,
    UNIQUE_VIOLATION,
    is_violation,
    storage_error,
)
from timesheet_tracker.domain.clock import ClockRecord
from timesheet_tracker.domain.errors import (
    AlreadyOpenError,
    InvalidReferenceError,
    StorageError,
)
from timesheet_tracker.services.clock import ClockRepository

CLOCK_COLUMNS = "id, user_id, job_id, work_date, clock_in, clock_out, created_at"


@dataclass
class SupabaseClockRepository(ClockRepository):
    """Supabase implementation for clock records."""

    client: Client

    def find_latest(
        self,
        user_id: int,
        job_id: int | None,
        work_date: date,
        *,
        open_only: bool = False,
    ) -> ClockRecord | None:
        """Return the newest record for the user, job scope and date."""
        query = (
            self.client.table("clock_records")
            .select(CLOCK_COLUMNS)
            .eq("user_id", user_id)
            .eq("work_date", work_date.isoformat())
        )
        if job_id is None:
            query = query.is_("job_id", "null")
        else:
            query = query.eq("job_id", job_id)
        if open_only:
            query = query.is_("clock_out", "null")
        try:
            response = query.order("id", desc=True).limit(1).execute()
        except APIError as exc:
            raise storage_error(exc, "load clock record") from exc
        if not response.data:
            return None
        return parse_clock_row(response.data[0])

    def create_record(
        self, user_id: int, job_id: int | None, work_date: date, clock_in: time
    ) -> ClockRecord:
        """Insert an open record.

        The partial unique index on open records turns a concurrent duplicate
        clock-in into a unique violation. A job deleted after the ownership check
        surfaces as a foreign key violation.
        """
        try:
            response = (
                self.client.table("clock_records")
                .insert(
                    {
                        "user_id": user_id,
                        "job_id": job_id,
                        "work_date": work_date.isoformat(),
                        "clock_in": clock_in.isoformat(timespec="seconds"),
                        "clock_out": None,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if is_violation(exc, UNIQUE_VIOLATION):
                raise AlreadyOpenError from exc
            if is_violation(exc, FOREIGN_KEY_VIOLATION):
                raise InvalidReferenceError("Invalid job") from exc
            raise storage_error(exc, "create clock record") from exc
        if not response.data:
            raise StorageError("Failed to create clock record")
        return parse_clock_row(response.data[0])

    def close_record(
        self, record_id: int, user_id: int, clock_out: time
    ) -> ClockRecord | None:
        """Set clock-out only while the record is still open."""
        try:
            response = (
                self.client.table("clock_records")
                .update({"clock_out": clock_out.isoformat(timespec="seconds")})
                .eq("id", record_id)
                .eq("user_id", user_id)
                .is_("clock_out", "null")
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "close clock record") from exc
        if not response.data:
            return None
        return parse_clock_row(response.data[0])


def parse_clock_row(row: dict[str, object]) -> ClockRecord:
    """Build a ClockRecord from a row, reading an embedded job when present."""
    job = row.get("jobs")
    job_name = None
    job_rate = None
    if isinstance(job, dict):
        job_name = job.get("name")
        job_rate = job.get("hourly_rate")
    created_raw = row.get("created_at")
    job_id = row.get("job_id")
    return ClockRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        job_id=int(job_id) if job_id is not None else None,
        work_date=date.fromisoformat(str(row["work_date"])),
        clock_in=_parse_time(row.get("clock_in")),
        clock_out=_parse_time(row.get("clock_out")),
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
        job_name=str(job_name) if job_name is not None else None,
        job_hourly_rate=float(job_rate) if isinstance(job_rate, int | float) else None,
    )


def _parse_time(raw: object) -> time | None:
    if isinstance(raw, str) and raw:
        return time.fromisoformat(raw)
    return None

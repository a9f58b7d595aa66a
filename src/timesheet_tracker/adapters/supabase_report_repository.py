"""Supabase repository for report queries."""

from dataclasses import dataclass
from datetime import date

from postgrest.exceptions import APIError
from supabase import Client

from timesheet_tracker.adapters.supabase_clock_repository import (
    CLOCK_COLUMNS,
    parse_clock_row,
)
from timesheet_tracker.adapters.supabase_errors import storage_error
from timesheet_tracker.domain.clock import ClockRecord
from timesheet_tracker.services.reports import ReportRepository


@dataclass
class SupabaseReportRepository(ReportRepository):
    """Supabase implementation for report queries."""

    client: Client

    def list_records(
        self,
        user_id: int,
        *,
        job_id: int | None = None,
        start: date | None = None,
        on: date | None = None,
    ) -> list[ClockRecord]:
        """Return records joined with the job's current name and rate."""
        query = (
            self.client.table("clock_records")
            .select(f"{CLOCK_COLUMNS}, jobs(name, hourly_rate)")
            .eq("user_id", user_id)
        )
        if job_id is not None:
            query = query.eq("job_id", job_id)
        if on is not None:
            query = query.eq("work_date", on.isoformat())
        if start is not None:
            query = query.gte("work_date", start.isoformat())
        try:
            response = (
                query.order("work_date", desc=True).order("id", desc=True).execute()
            )
        except APIError as exc:
            raise storage_error(exc, "list clock records") from exc
        return [parse_clock_row(row) for row in response.data or []]

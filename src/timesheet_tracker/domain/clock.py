"""Domain models for clock records."""

from dataclasses import dataclass
from datetime import date, datetime, time


@dataclass(frozen=True)
class ClockRecord:
    """A single clock-in/clock-out pair, optionally tagged with a job.

    ``job_name`` and ``job_hourly_rate`` are joined from the job row when the
    record is read and are never stored on the record itself.
    """

    id: int
    user_id: int
    job_id: int | None
    work_date: date
    clock_in: time | None
    clock_out: time | None
    created_at: datetime | None = None
    job_name: str | None = None
    job_hourly_rate: float | None = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def is_complete(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None


@dataclass(frozen=True)
class ClockStatus:
    """Current clock state for a user and job scope."""

    clocked_in: bool
    clock_in: time | None
    clock_out: time | None
    work_date: date
    job_id: int | None


@dataclass(frozen=True)
class ClockOutResult:
    """Outcome of closing a session."""

    record: ClockRecord
    hours: float | None
    pay: float | None

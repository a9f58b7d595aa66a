"""Clock-in/clock-out state machine per user and job scope."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Protocol

from timesheet_tracker.domain.clock import ClockOutResult, ClockRecord, ClockStatus
from timesheet_tracker.domain.errors import (
    AlreadyOpenError,
    InvalidReferenceError,
    NotOpenError,
)
from timesheet_tracker.services.jobs import JobRepository
from timesheet_tracker.services.pay import compute_pay
from timesheet_tracker.services.rates import DEFAULT_HOURLY_RATE, resolve_rate

_logger = logging.getLogger(__name__)


class ClockRepository(Protocol):
    """Persistence interface for clock records.

    ``job_id=None`` selects only records without a job.
    """

    def find_latest(
        self,
        user_id: int,
        job_id: int | None,
        work_date: date,
        *,
        open_only: bool = False,
    ) -> ClockRecord | None:
        """Return the most recently created record for the scope and date."""

    def create_record(
        self, user_id: int, job_id: int | None, work_date: date, clock_in: time
    ) -> ClockRecord:
        """Insert an open record, raising AlreadyOpenError on a duplicate."""

    def close_record(
        self, record_id: int, user_id: int, clock_out: time
    ) -> ClockRecord | None:
        """Set clock-out on a still-open record; return None if already closed."""


@dataclass
class ClockService:
    """Opens and closes work sessions."""

    clock_repository: ClockRepository
    job_repository: JobRepository
    default_hourly_rate: float = DEFAULT_HOURLY_RATE
    clock: Callable[[], datetime] = field(default=datetime.now)

    def clock_in(self, user_id: int, job_id: int | None = None) -> ClockRecord:
        """Open a session for today in the given job scope."""
        if job_id is not None and self.job_repository.get_job(job_id, user_id) is None:
            raise InvalidReferenceError("Invalid job")

        now = self._now()
        today = now.date()
        existing = self.clock_repository.find_latest(
            user_id, job_id, today, open_only=True
        )
        if existing is not None:
            _logger.info(
                "Clock-in refused, already open: user_id=%s job_id=%s record_id=%s",
                user_id,
                job_id,
                existing.id,
            )
            raise AlreadyOpenError

        record = self.clock_repository.create_record(
            user_id=user_id, job_id=job_id, work_date=today, clock_in=now.time()
        )
        _logger.info(
            "Clocked in: user_id=%s job_id=%s record_id=%s", user_id, job_id, record.id
        )
        return record

    def clock_out(self, user_id: int, job_id: int | None = None) -> ClockOutResult:
        """Close today's open session in the given job scope."""
        now = self._now()
        today = now.date()
        record = self.clock_repository.find_latest(
            user_id, job_id, today, open_only=True
        )
        if record is None:
            _logger.info(
                "Clock-out refused, not open: user_id=%s job_id=%s", user_id, job_id
            )
            raise NotOpenError

        closed = self.clock_repository.close_record(record.id, user_id, now.time())
        if closed is None:
            raise NotOpenError
        _logger.info(
            "Clocked out: user_id=%s job_id=%s record_id=%s", user_id, job_id, record.id
        )

        closed = self._with_current_rate(closed, user_id)
        rate = resolve_rate(closed, self.default_hourly_rate)
        breakdown = compute_pay(closed, rate)
        return ClockOutResult(record=closed, hours=breakdown.hours, pay=breakdown.pay)

    def status(self, user_id: int, job_id: int | None = None) -> ClockStatus:
        """Return today's state for the given job scope."""
        today = self._now().date()
        latest = self.clock_repository.find_latest(user_id, job_id, today)
        if latest is None:
            return ClockStatus(
                clocked_in=False,
                clock_in=None,
                clock_out=None,
                work_date=today,
                job_id=job_id,
            )
        return ClockStatus(
            clocked_in=latest.is_open,
            clock_in=latest.clock_in,
            clock_out=latest.clock_out,
            work_date=latest.work_date,
            job_id=latest.job_id,
        )

    def _now(self) -> datetime:
        return self.clock().replace(microsecond=0)

    def _with_current_rate(self, record: ClockRecord, user_id: int) -> ClockRecord:
        if record.job_id is None:
            return record
        job = self.job_repository.get_job(record.job_id, user_id)
        if job is None:
            return record
        return replace(record, job_name=job.name, job_hourly_rate=job.hourly_rate)

"""Job management for a user's own jobs."""

import logging
from dataclasses import dataclass
from typing import Protocol

from timesheet_tracker.domain.errors import (
    DeleteConflictError,
    JobNotFoundError,
    ValidationError,
)
from timesheet_tracker.domain.jobs import Job
from timesheet_tracker.services.rates import DEFAULT_HOURLY_RATE, coerce_rate

_logger = logging.getLogger(__name__)


class JobRepository(Protocol):
    """Persistence interface for jobs."""

    def list_jobs(self, user_id: int) -> list[Job]:
        """Return the user's jobs, newest first."""

    def get_job(self, job_id: int, user_id: int) -> Job | None:
        """Return a job when it exists and belongs to the user."""

    def create_job(
        self, user_id: int, name: str, description: str | None, hourly_rate: float
    ) -> Job:
        """Create a job and return it."""

    def update_job(
        self,
        job_id: int,
        user_id: int,
        name: str,
        description: str | None,
        hourly_rate: float,
    ) -> Job:
        """Update a job and return it."""

    def count_records(self, job_id: int) -> int:
        """Return how many clock records reference the job."""

    def delete_job(self, job_id: int, user_id: int) -> None:
        """Delete a job, raising DeleteConflictError if records reference it."""


@dataclass
class JobService:
    """Application service for job CRUD."""

    repository: JobRepository
    default_hourly_rate: float = DEFAULT_HOURLY_RATE

    def list_jobs(self, user_id: int) -> list[Job]:
        """Return the user's jobs."""
        return self.repository.list_jobs(user_id)

    def create_job(
        self,
        user_id: int,
        name: str | None,
        description: str | None = None,
        hourly_rate: object = None,
    ) -> Job:
        """Create a job; a missing or unusable rate becomes the default rate."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Job name is required")
        return self.repository.create_job(
            user_id=user_id,
            name=cleaned,
            description=description or None,
            hourly_rate=coerce_rate(hourly_rate, self.default_hourly_rate),
        )

    def update_job(
        self, user_id: int, job_id: int, payload: dict[str, object]
    ) -> Job:
        """Update a job from the keys present in ``payload``.

        A blank name or an unusable rate keeps the current value.
        """
        job = self.repository.get_job(job_id, user_id)
        if job is None:
            raise JobNotFoundError
        cleaned = str(payload.get("name") or "").strip() or job.name
        new_description = payload.get("description", job.description)
        return self.repository.update_job(
            job_id=job_id,
            user_id=user_id,
            name=cleaned,
            description=new_description or None,
            hourly_rate=coerce_rate(payload.get("hourly_rate"), job.hourly_rate),
        )

    def delete_job(self, user_id: int, job_id: int) -> None:
        """Delete a job unless clock records still reference it."""
        if self.repository.get_job(job_id, user_id) is None:
            raise JobNotFoundError
        if self.repository.count_records(job_id) > 0:
            _logger.info("Job delete refused: job_id=%s has records", job_id)
            raise DeleteConflictError("Cannot delete job with existing clock records")
        self.repository.delete_job(job_id, user_id)
        _logger.info("Job deleted: user_id=%s job_id=%s", user_id, job_id)

"""Domain models for jobs."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Job:
    """A named piece of work with its own hourly rate."""

    id: int
    user_id: int
    name: str
    description: str | None
    hourly_rate: float
    created_at: datetime | None = None

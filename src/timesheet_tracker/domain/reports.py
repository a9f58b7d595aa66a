"""Domain models for time and salary reports."""

from dataclasses import dataclass
from enum import StrEnum

from timesheet_tracker.domain.clock import ClockRecord


class ReportPeriod(StrEnum):
    """Time window applied to report queries."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class PayBreakdown:
    """Hours and pay derived from a record; ``None`` means not applicable."""

    hours: float | None
    pay: float | None


@dataclass(frozen=True)
class ReportRow:
    """A clock record with its derived values."""

    record: ClockRecord
    hourly_rate: float
    hours: float | None
    pay: float | None


@dataclass(frozen=True)
class Report:
    """Matched rows plus totals over completed rows."""

    rows: list[ReportRow]
    total_records: int
    completed_records: int
    total_hours: float
    total_pay: float

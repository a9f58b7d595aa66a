"""Time and salary reports over clock records."""

import calendar
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Protocol

from timesheet_tracker.domain.clock import ClockRecord
from timesheet_tracker.domain.errors import ValidationError
from timesheet_tracker.domain.reports import Report, ReportPeriod, ReportRow
from timesheet_tracker.services.pay import compute_pay
from timesheet_tracker.services.rates import DEFAULT_HOURLY_RATE, resolve_rate

WEEK_DAYS = 7


class ReportRepository(Protocol):
    """Read interface for report queries."""

    def list_records(
        self,
        user_id: int,
        *,
        job_id: int | None = None,
        start: date | None = None,
        on: date | None = None,
    ) -> list[ClockRecord]:
        """Return the user's records joined with their job's name and rate.

        ``job_id=None`` applies no job filter. ``start`` is an inclusive lower
        bound on the record date; ``on`` selects a single date.
        """


@dataclass(frozen=True)
class PeriodWindow:
    """Date filter for a report period."""

    start: date | None = None
    on: date | None = None


@dataclass
class ReportService:
    """Builds reports by re-deriving hours and pay from stored records."""

    repository: ReportRepository
    default_hourly_rate: float = DEFAULT_HOURLY_RATE
    clock: Callable[[], datetime] = field(default=datetime.now)

    def build_report(
        self,
        user_id: int,
        period: ReportPeriod | str = ReportPeriod.ALL,
        job_id: int | None = None,
    ) -> Report:
        """Return per-record values and totals for the period and job filter."""
        window = period_window(_parse_period(period), self.clock().date())
        records = self.repository.list_records(
            user_id, job_id=job_id, start=window.start, on=window.on
        )
        records = sorted(records, key=lambda r: (r.work_date, r.id), reverse=True)
        return aggregate(records, self.default_hourly_rate)


def aggregate(records: list[ClockRecord], default_rate: float) -> Report:
    """Compute per-record values and fold completed records into totals."""
    rows: list[ReportRow] = []
    completed = 0
    total_hours = 0.0
    total_pay = 0.0
    for record in records:
        rate = resolve_rate(record, default_rate)
        breakdown = compute_pay(record, rate)
        rows.append(
            ReportRow(
                record=record,
                hourly_rate=rate,
                hours=breakdown.hours,
                pay=breakdown.pay,
            )
        )
        if breakdown.hours is not None and breakdown.pay is not None:
            completed += 1
            total_hours += breakdown.hours
            total_pay += breakdown.pay
    return Report(
        rows=rows,
        total_records=len(rows),
        completed_records=completed,
        total_hours=total_hours,
        total_pay=total_pay,
    )


def period_window(period: ReportPeriod, today: date) -> PeriodWindow:
    """Translate a period into a date filter relative to ``today``."""
    if period is ReportPeriod.TODAY:
        return PeriodWindow(on=today)
    if period is ReportPeriod.WEEK:
        return PeriodWindow(start=today - timedelta(days=WEEK_DAYS))
    if period is ReportPeriod.MONTH:
        return PeriodWindow(start=one_month_before(today))
    return PeriodWindow()


def one_month_before(day: date) -> date:
    """Return the same day one calendar month earlier, clamped to month end."""
    year, month = (day.year - 1, 12) if day.month == 1 else (day.year, day.month - 1)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _parse_period(period: ReportPeriod | str) -> ReportPeriod:
    try:
        return ReportPeriod(period)
    except ValueError as exc:
        allowed = ", ".join(p.value for p in ReportPeriod)
        raise ValidationError(f"Invalid period. Use one of: {allowed}") from exc

"""Hourly rate resolution."""

import math

from timesheet_tracker.domain.clock import ClockRecord

DEFAULT_HOURLY_RATE = 18.0


def resolve_rate(record: ClockRecord, default_rate: float = DEFAULT_HOURLY_RATE) -> float:
    """Return the job's current rate for a record, or the default rate."""
    if record.job_id is None:
        return default_rate
    return coerce_rate(record.job_hourly_rate, default_rate)


def coerce_rate(value: object, default_rate: float = DEFAULT_HOURLY_RATE) -> float:
    """Return ``value`` as a positive finite rate, falling back to the default."""
    if isinstance(value, bool) or value is None:
        return default_rate
    try:
        rate = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default_rate
    if not math.isfinite(rate) or rate <= 0:
        return default_rate
    return rate

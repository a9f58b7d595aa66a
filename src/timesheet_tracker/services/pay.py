"""Duration and pay calculation for clock records."""

from datetime import datetime

from timesheet_tracker.domain.clock import ClockRecord
from timesheet_tracker.domain.reports import PayBreakdown

SECONDS_PER_HOUR = 3600


def compute_pay(record: ClockRecord, rate: float) -> PayBreakdown:
    """Return elapsed hours and pay for a record.

    Open or incomplete records yield ``None`` for both values. Both times are
    read as wall-clock times on the record's date, so a clock-out earlier than
    the clock-in produces negative hours; such values are passed through as-is.
    """
    if record.clock_in is None or record.clock_out is None:
        return PayBreakdown(hours=None, pay=None)
    started = datetime.combine(record.work_date, record.clock_in)
    ended = datetime.combine(record.work_date, record.clock_out)
    hours = (ended - started).total_seconds() / SECONDS_PER_HOUR
    return PayBreakdown(hours=hours, pay=hours * rate)


def format_amount(value: float | None) -> str | None:
    """Round a derived value to two decimals for presentation."""
    if value is None:
        return None
    return f"{value:.2f}"

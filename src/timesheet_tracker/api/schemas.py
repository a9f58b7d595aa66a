"""Request bodies and response serializers for the HTTP API."""

from datetime import date, time

from pydantic import BaseModel

from timesheet_tracker.domain.clock import ClockOutResult, ClockRecord, ClockStatus
from timesheet_tracker.domain.jobs import Job
from timesheet_tracker.domain.models import UserRecord
from timesheet_tracker.domain.reports import Report, ReportRow
from timesheet_tracker.services.pay import format_amount


class RegisterRequest(BaseModel):
    """Registration payload."""

    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    """Login payload; ``username`` may also hold an email address."""

    username: str
    password: str


class ClockRequest(BaseModel):
    """Clock-in/clock-out payload."""

    job_id: int | None = None


class JobCreateRequest(BaseModel):
    """Job creation payload."""

    name: str | None = None
    description: str | None = None
    hourly_rate: float | str | None = None


class JobUpdateRequest(BaseModel):
    """Job update payload; omitted fields keep their current value."""

    name: str | None = None
    description: str | None = None
    hourly_rate: float | str | None = None


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Return the public view of a user."""
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "isAdmin": user.is_admin,
    }


def serialize_job(job: Job) -> dict[str, object]:
    """Return a job as a JSON-ready dict."""
    return {
        "id": job.id,
        "user_id": job.user_id,
        "name": job.name,
        "description": job.description,
        "hourly_rate": job.hourly_rate,
        "created_at": job.created_at.isoformat() if job.created_at else None,
    }


def serialize_status(status: ClockStatus) -> dict[str, object]:
    """Return the clock state for one job scope."""
    return {
        "clockedIn": status.clocked_in,
        "clockInTime": _format_time(status.clock_in),
        "clockOutTime": _format_time(status.clock_out),
        "date": _format_date(status.work_date),
        "jobId": status.job_id,
    }


def serialize_clock_in(record: ClockRecord) -> dict[str, object]:
    """Return the response body for a successful clock-in."""
    return {
        "message": "Clocked in successfully",
        "clockInTime": _format_time(record.clock_in),
        "date": _format_date(record.work_date),
        "jobId": record.job_id,
        "id": record.id,
    }


def serialize_clock_out(result: ClockOutResult) -> dict[str, object]:
    """Return the response body for a clock-out, with hours and salary."""
    record = result.record
    return {
        "message": "Clocked out successfully",
        "clockInTime": _format_time(record.clock_in),
        "clockOutTime": _format_time(record.clock_out),
        "date": _format_date(record.work_date),
        "jobId": record.job_id,
        "hours": format_amount(result.hours),
        "salary": format_amount(result.pay),
    }


def serialize_report(report: Report) -> dict[str, object]:
    """Return report rows and totals with amounts rounded to two decimals."""
    return {
        "records": [_serialize_row(row) for row in report.rows],
        "totalRecords": report.total_records,
        "completedRecords": report.completed_records,
        "totalHours": format_amount(report.total_hours),
        "totalSalary": format_amount(report.total_pay),
    }


def _serialize_row(row: ReportRow) -> dict[str, object]:
    record = row.record
    return {
        "id": record.id,
        "user_id": record.user_id,
        "job_id": record.job_id,
        "job_name": record.job_name,
        "date": _format_date(record.work_date),
        "clock_in": _format_time(record.clock_in),
        "clock_out": _format_time(record.clock_out),
        "created_at": record.created_at.isoformat() if record.created_at else None,
        "hourly_rate": row.hourly_rate,
        "hours": format_amount(row.hours),
        "salary": format_amount(row.pay),
    }


def _format_time(value: time | None) -> str | None:
    return value.isoformat(timespec="seconds") if value is not None else None


def _format_date(value: date) -> str:
    return value.isoformat()

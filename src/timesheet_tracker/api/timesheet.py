"""Clock and report endpoints."""

from fastapi import APIRouter, Depends

from timesheet_tracker.api.dependencies import get_container, require_user
from timesheet_tracker.api.schemas import (
    ClockRequest,
    serialize_clock_in,
    serialize_clock_out,
    serialize_report,
    serialize_status,
)
from timesheet_tracker.containers import AppContainer
from timesheet_tracker.domain.models import AuthenticatedUser

router = APIRouter(prefix="/api", tags=["timesheet"])


@router.get("/status")
def clock_status(
    job_id: int | None = None,
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return today's clock state for the job scope."""
    return serialize_status(container.clock_service.status(user.id, job_id))


@router.post("/clock-in")
def clock_in(
    body: ClockRequest | None = None,
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Open a session in the job scope."""
    job_id = body.job_id if body else None
    return serialize_clock_in(container.clock_service.clock_in(user.id, job_id))


@router.post("/clock-out")
def clock_out(
    body: ClockRequest | None = None,
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Close the open session in the job scope."""
    job_id = body.job_id if body else None
    return serialize_clock_out(container.clock_service.clock_out(user.id, job_id))


@router.get("/report")
def report(
    period: str = "all",
    job_id: int | None = None,
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return hours and salary per record plus totals."""
    return serialize_report(
        container.report_service.build_report(user.id, period=period, job_id=job_id)
    )

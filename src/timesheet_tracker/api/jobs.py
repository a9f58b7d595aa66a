"""Job CRUD endpoints."""

from fastapi import APIRouter, Depends, status

from timesheet_tracker.api.dependencies import get_container, require_user
from timesheet_tracker.api.schemas import (
    JobCreateRequest,
    JobUpdateRequest,
    serialize_job,
)
from timesheet_tracker.containers import AppContainer
from timesheet_tracker.domain.models import AuthenticatedUser

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("")
def list_jobs(
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the acting user's jobs."""
    jobs = container.job_service.list_jobs(user.id)
    return {"jobs": [serialize_job(job) for job in jobs]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_job(
    body: JobCreateRequest,
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a job for the acting user."""
    job = container.job_service.create_job(
        user.id, body.name, body.description, body.hourly_rate
    )
    return {"message": "Job created successfully", "job": serialize_job(job)}


@router.put("/{job_id}")
def update_job(
    job_id: int,
    body: JobUpdateRequest,
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update one of the acting user's jobs."""
    job = container.job_service.update_job(
        user.id, job_id, body.model_dump(exclude_unset=True)
    )
    return {"message": "Job updated successfully", "job": serialize_job(job)}


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete a job that no clock record references."""
    container.job_service.delete_job(user.id, job_id)
    return {"message": "Job deleted successfully"}

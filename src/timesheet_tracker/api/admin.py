"""Admin API endpoints."""

from fastapi import APIRouter, Depends

from timesheet_tracker.api.dependencies import get_container, require_admin
from timesheet_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@router.get("/users")
def list_users(container: AppContainer = Depends(get_container)) -> dict[str, object]:
    """Return every account with usage counts and an overall summary."""
    return container.admin_service.list_users()

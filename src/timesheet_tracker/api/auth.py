"""Registration, login and current-user endpoints."""

from fastapi import APIRouter, Depends, status

from timesheet_tracker.api.dependencies import get_container, require_user
from timesheet_tracker.api.schemas import LoginRequest, RegisterRequest, serialize_user
from timesheet_tracker.containers import AppContainer
from timesheet_tracker.domain.errors import AuthError
from timesheet_tracker.domain.models import AuthenticatedUser

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create an account; the very first account becomes an admin."""
    result = container.user_service.register(body.username, body.email, body.password)
    return {
        "message": "User registered successfully",
        "token": result.token,
        "user": serialize_user(result.user),
    }


@router.post("/login")
def login(
    body: LoginRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Authenticate with a username or email and a password."""
    result = container.user_service.login(body.username, body.password)
    return {
        "message": "Login successful",
        "token": result.token,
        "user": serialize_user(result.user),
    }


@router.get("/me")
def me(
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the stored profile of the acting user."""
    stored = container.user_service.get_user(user.id)
    if stored is None:
        raise AuthError("User not found")
    return {
        **serialize_user(stored),
        "createdAt": stored.created_at.isoformat() if stored.created_at else None,
    }

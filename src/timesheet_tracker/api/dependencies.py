"""FastAPI dependencies for container access and bearer-token auth."""

from fastapi import Depends, Header, Request

from timesheet_tracker.containers import AppContainer
from timesheet_tracker.domain.errors import AuthError, PermissionDeniedError
from timesheet_tracker.domain.models import AuthenticatedUser


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def require_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> AuthenticatedUser:
    """Resolve the acting user from an ``Authorization: Bearer`` header."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("Access token required")
    return container.token_service.verify(token.strip())


def require_admin(
    user: AuthenticatedUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> AuthenticatedUser:
    """Ensure the acting user currently holds the admin flag."""
    stored = container.user_service.get_user(user.id)
    if stored is None or not stored.is_admin:
        raise PermissionDeniedError("Admin access required")
    return user

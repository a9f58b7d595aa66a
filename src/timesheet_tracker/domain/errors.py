"""Domain exceptions raised by services and repositories."""

_ALREADY_OPEN = "You are already clocked in. Please clock out first."
_NOT_OPEN = "You are not clocked in. Please clock in first."


class TimesheetError(Exception):
    """Base exception for timesheet business rule violations."""


class ValidationError(TimesheetError):
    """Raised when input data is missing or invalid."""


class AuthError(TimesheetError):
    """Raised when credentials or tokens are missing or wrong."""


class PermissionDeniedError(AuthError):
    """Raised when a token is invalid or the user lacks a privilege."""


class StateConflictError(TimesheetError):
    """Raised when a clock transition is not allowed in the current state."""


class AlreadyOpenError(StateConflictError):
    """Raised on clock-in while a session is already open for the scope."""

    def __init__(self, message: str = _ALREADY_OPEN) -> None:
        super().__init__(message)


class NotOpenError(StateConflictError):
    """Raised on clock-out when no session is open for the scope."""

    def __init__(self, message: str = _NOT_OPEN) -> None:
        super().__init__(message)


class InvalidReferenceError(TimesheetError):
    """Raised when a job id does not belong to the acting user."""


class JobNotFoundError(InvalidReferenceError):
    """Raised when a job to update or delete does not exist for the user."""

    def __init__(self, message: str = "Job not found") -> None:
        super().__init__(message)


class DeleteConflictError(TimesheetError):
    """Raised when a job cannot be deleted because records reference it."""


class StorageError(TimesheetError):
    """Raised when the backing store fails."""

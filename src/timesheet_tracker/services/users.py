"""User registration and login."""

import logging
from dataclasses import dataclass
from typing import Protocol

from timesheet_tracker.domain.errors import AuthError, ValidationError
from timesheet_tracker.domain.models import UserRecord
from timesheet_tracker.services.auth import PasswordHasher, TokenService

_logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_login(self, login: str) -> UserRecord | None:
        """Return the user whose username or email equals ``login``."""

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create a user, making the first user ever created an admin.

        Raises ValidationError when the username or email is taken.
        """


@dataclass(frozen=True)
class AuthResult:
    """A user together with a freshly issued token."""

    user: UserRecord
    token: str


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    hasher: PasswordHasher
    tokens: TokenService
    min_password_length: int = MIN_PASSWORD_LENGTH

    def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create an account and return it with an access token."""
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email or not password:
            raise ValidationError("Username, email, and password are required")
        if len(password) < self.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.min_password_length} characters long"
            )

        user = self.repository.create_user(
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
        )
        _logger.info("User registered: user_id=%s admin=%s", user.id, user.is_admin)
        return AuthResult(user=user, token=self.tokens.issue(user))

    def login(self, login: str, password: str) -> AuthResult:
        """Authenticate by username or email."""
        login = (login or "").strip()
        if not login or not password:
            raise ValidationError("Username and password are required")
        user = self.repository.get_by_login(login)
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise AuthError("Invalid username or password")
        return AuthResult(user=user, token=self.tokens.issue(user))

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return a user by id."""
        return self.repository.get_by_id(user_id)

"""Password hashing and access tokens."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from timesheet_tracker.domain.errors import PermissionDeniedError
from timesheet_tracker.domain.models import AuthenticatedUser, UserRecord


@dataclass
class PasswordHasher:
    """bcrypt password hashing."""

    rounds: int = 12

    def hash(self, password: str) -> str:
        """Return a salted hash for the password."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            return False


@dataclass
class TokenService:
    """Issues and verifies signed bearer tokens."""

    secret: str
    algorithm: str = "HS256"
    expires_in: timedelta = timedelta(days=7)

    def issue(self, user: UserRecord) -> str:
        """Return a signed token identifying the user."""
        payload = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "isAdmin": user.is_admin,
            "exp": datetime.now(tz=UTC) + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> AuthenticatedUser:
        """Decode a token, raising PermissionDeniedError when it is not valid."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            raise PermissionDeniedError("Invalid or expired token") from exc
        try:
            return AuthenticatedUser(
                id=int(payload["sub"]),
                username=str(payload.get("username", "")),
                email=str(payload.get("email", "")),
                is_admin=bool(payload.get("isAdmin", False)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PermissionDeniedError("Invalid token payload") from exc

"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from timesheet_tracker.services.rates import DEFAULT_HOURLY_RATE
from timesheet_tracker.services.users import MIN_PASSWORD_LENGTH

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

LOCAL_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7
    default_hourly_rate: float = DEFAULT_HOURLY_RATE
    min_password_length: int = MIN_PASSWORD_LENGTH
    log_level: str = "INFO"
    allowed_origins: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None, environment: str = "local") -> list[str]:
    """Parse allowed CORS origins from env."""
    cleaned = (raw or "").strip()
    if cleaned == "*":
        return ["*"]
    if not cleaned:
        return list(LOCAL_ORIGINS) if environment == "local" else []
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins

"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from timesheet_tracker.adapters.supabase_admin_repository import (
    SupabaseAdminRepository,
)
from timesheet_tracker.adapters.supabase_clock_repository import (
    SupabaseClockRepository,
)
from timesheet_tracker.adapters.supabase_job_repository import SupabaseJobRepository
from timesheet_tracker.adapters.supabase_report_repository import (
    SupabaseReportRepository,
)
from timesheet_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from timesheet_tracker.config import Settings
from timesheet_tracker.services.admin import AdminService
from timesheet_tracker.services.auth import PasswordHasher, TokenService
from timesheet_tracker.services.clock import ClockService
from timesheet_tracker.services.jobs import JobService
from timesheet_tracker.services.reports import ReportService
from timesheet_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    user_service: UserService
    job_service: JobService
    clock_service: ClockService
    report_service: ReportService
    admin_service: AdminService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    job_repository = SupabaseJobRepository(supabase_client)
    clock_repository = SupabaseClockRepository(supabase_client)
    report_repository = SupabaseReportRepository(supabase_client)
    admin_repository = SupabaseAdminRepository(supabase_client)
    token_service = TokenService(
        secret=resolved_settings.jwt_secret,
        algorithm=resolved_settings.jwt_algorithm,
        expires_in=timedelta(days=resolved_settings.jwt_expires_days),
    )
    user_service = UserService(
        repository=user_repository,
        hasher=PasswordHasher(),
        tokens=token_service,
        min_password_length=resolved_settings.min_password_length,
    )
    job_service = JobService(
        job_repository, default_hourly_rate=resolved_settings.default_hourly_rate
    )
    clock_service = ClockService(
        clock_repository=clock_repository,
        job_repository=job_repository,
        default_hourly_rate=resolved_settings.default_hourly_rate,
    )
    report_service = ReportService(
        report_repository, default_hourly_rate=resolved_settings.default_hourly_rate
    )
    admin_service = AdminService(admin_repository)

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        user_service=user_service,
        job_service=job_service,
        clock_service=clock_service,
        report_service=report_service,
        admin_service=admin_service,
    )

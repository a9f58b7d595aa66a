"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta

import pytest
from fastapi.testclient import TestClient

from timesheet_tracker.api.app import create_app
from timesheet_tracker.config import Settings
from timesheet_tracker.containers import AppContainer
from timesheet_tracker.domain.admin import AdminUser, RecordCounts
from timesheet_tracker.domain.clock import ClockRecord
from timesheet_tracker.domain.errors import (
    AlreadyOpenError,
    DeleteConflictError,
    JobNotFoundError,
    ValidationError,
)
from timesheet_tracker.domain.jobs import Job
from timesheet_tracker.domain.models import UserRecord
from timesheet_tracker.services.admin import AdminRepository, AdminService
from timesheet_tracker.services.auth import PasswordHasher, TokenService
from timesheet_tracker.services.clock import ClockRepository, ClockService
from timesheet_tracker.services.jobs import JobRepository, JobService
from timesheet_tracker.services.reports import ReportRepository, ReportService
from timesheet_tracker.services.users import UserRepository, UserService

# A JWT-shaped key so the real supabase client accepts it.
SERVICE_KEY = "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZV9yb2xlIn0.signature"


@dataclass
class FakeClock:
    """Mutable clock callable."""

    now: datetime = datetime(2024, 3, 15, 9, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[int, UserRecord] = field(default_factory=dict)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_login(self, login: str) -> UserRecord | None:
        for user in self.users.values():
            if user.username == login:
                return user
        for user in self.users.values():
            if user.email == login:
                return user
        return None

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        for user in self.users.values():
            if user.username == username or user.email == email:
                raise ValidationError("Username or email already exists")
        user = UserRecord(
            id=len(self.users) + 1,
            username=username,
            email=email,
            password_hash=password_hash,
            is_admin=not self.users,
            created_at=datetime(2024, 1, 1) + timedelta(days=len(self.users)),
        )
        self.users[user.id] = user
        return user


@dataclass
class InMemoryJobRepository(JobRepository):
    """In-memory job repository sharing the record store with clock fakes."""

    jobs: dict[int, Job] = field(default_factory=dict)
    records: dict[int, ClockRecord] = field(default_factory=dict)

    def list_jobs(self, user_id: int) -> list[Job]:
        owned = [job for job in self.jobs.values() if job.user_id == user_id]
        return sorted(owned, key=lambda job: job.id, reverse=True)

    def get_job(self, job_id: int, user_id: int) -> Job | None:
        job = self.jobs.get(job_id)
        if job is None or job.user_id != user_id:
            return None
        return job

    def create_job(
        self, user_id: int, name: str, description: str | None, hourly_rate: float
    ) -> Job:
        job = Job(
            id=max(self.jobs, default=0) + 1,
            user_id=user_id,
            name=name,
            description=description,
            hourly_rate=hourly_rate,
        )
        self.jobs[job.id] = job
        return job

    def update_job(
        self,
        job_id: int,
        user_id: int,
        name: str,
        description: str | None,
        hourly_rate: float,
    ) -> Job:
        job = self.get_job(job_id, user_id)
        if job is None:
            raise JobNotFoundError
        updated = replace(
            job, name=name, description=description, hourly_rate=hourly_rate
        )
        self.jobs[job_id] = updated
        return updated

    def count_records(self, job_id: int) -> int:
        return sum(1 for record in self.records.values() if record.job_id == job_id)

    def delete_job(self, job_id: int, user_id: int) -> None:
        if self.count_records(job_id) > 0:
            raise DeleteConflictError("Cannot delete job with existing clock records")
        if self.get_job(job_id, user_id) is not None:
            del self.jobs[job_id]


@dataclass
class InMemoryClockRepository(ClockRepository, ReportRepository):
    """In-memory clock record store that joins job data on read."""

    jobs: dict[int, Job] = field(default_factory=dict)
    records: dict[int, ClockRecord] = field(default_factory=dict)

    def add(self, record: ClockRecord) -> ClockRecord:
        self.records[record.id] = record
        return record

    def find_latest(
        self,
        user_id: int,
        job_id: int | None,
        work_date: date,
        *,
        open_only: bool = False,
    ) -> ClockRecord | None:
        matches = [
            record
            for record in self.records.values()
            if record.user_id == user_id
            and record.job_id == job_id
            and record.work_date == work_date
            and (record.is_open or not open_only)
        ]
        if not matches:
            return None
        return self._joined(max(matches, key=lambda record: record.id))

    def create_record(
        self, user_id: int, job_id: int | None, work_date: date, clock_in: time
    ) -> ClockRecord:
        if self.find_latest(user_id, job_id, work_date, open_only=True) is not None:
            raise AlreadyOpenError
        record = ClockRecord(
            id=max(self.records, default=0) + 1,
            user_id=user_id,
            job_id=job_id,
            work_date=work_date,
            clock_in=clock_in,
            clock_out=None,
        )
        return self._joined(self.add(record))

    def close_record(
        self, record_id: int, user_id: int, clock_out: time
    ) -> ClockRecord | None:
        record = self.records.get(record_id)
        if record is None or record.user_id != user_id or not record.is_open:
            return None
        return self._joined(self.add(replace(record, clock_out=clock_out)))

    def list_records(
        self,
        user_id: int,
        *,
        job_id: int | None = None,
        start: date | None = None,
        on: date | None = None,
    ) -> list[ClockRecord]:
        return [
            self._joined(record)
            for record in self.records.values()
            if record.user_id == user_id
            and (job_id is None or record.job_id == job_id)
            and (start is None or record.work_date >= start)
            and (on is None or record.work_date == on)
        ]

    def _joined(self, record: ClockRecord) -> ClockRecord:
        job = self.jobs.get(record.job_id) if record.job_id is not None else None
        if job is None:
            return record
        return replace(record, job_name=job.name, job_hourly_rate=job.hourly_rate)


@dataclass
class InMemoryAdminRepository(AdminRepository):
    """Admin view over the other in-memory stores."""

    user_repository: InMemoryUserRepository = field(
        default_factory=InMemoryUserRepository
    )
    records: dict[int, ClockRecord] = field(default_factory=dict)

    def list_users(self) -> list[AdminUser]:
        users = sorted(
            self.user_repository.users.values(),
            key=lambda user: user.id,
            reverse=True,
        )
        return [
            AdminUser(
                id=user.id,
                username=user.username,
                email=user.email,
                is_admin=user.is_admin,
                created_at=user.created_at,
            )
            for user in users
        ]

    def list_record_counts(self) -> dict[int, RecordCounts]:
        counts: dict[int, RecordCounts] = {}
        for record in self.records.values():
            current = counts.get(record.user_id, RecordCounts())
            counts[record.user_id] = RecordCounts(
                total=current.total + 1,
                completed=current.completed + int(record.is_complete),
            )
        return counts


def make_record(  # noqa: PLR0913
    record_id: int,
    work_date: date,
    clock_in: time | None,
    clock_out: time | None,
    *,
    user_id: int = 1,
    job_id: int | None = None,
    job_hourly_rate: float | None = None,
) -> ClockRecord:
    return ClockRecord(
        id=record_id,
        user_id=user_id,
        job_id=job_id,
        work_date=work_date,
        clock_in=clock_in,
        clock_out=clock_out,
        job_hourly_rate=job_hourly_rate,
    )


def register(client: TestClient, username: str) -> dict[str, str]:
    """Register a user through the API and return bearer headers."""
    response = client.post(
        "/api/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "secret-password",
        },
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
        jwt_secret="test-secret-with-enough-bytes-for-hs256",
        environment="test",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def records() -> dict[int, ClockRecord]:
    return {}


@pytest.fixture
def job_repository(records: dict[int, ClockRecord]) -> InMemoryJobRepository:
    return InMemoryJobRepository(records=records)


@pytest.fixture
def clock_repository(
    job_repository: InMemoryJobRepository, records: dict[int, ClockRecord]
) -> InMemoryClockRepository:
    return InMemoryClockRepository(jobs=job_repository.jobs, records=records)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FakeClock,
    user_repository: InMemoryUserRepository,
    job_repository: InMemoryJobRepository,
    clock_repository: InMemoryClockRepository,
    records: dict[int, ClockRecord],
) -> AppContainer:
    token_service = TokenService(secret=settings.jwt_secret)
    user_service = UserService(
        repository=user_repository,
        hasher=PasswordHasher(rounds=4),
        tokens=token_service,
    )
    return AppContainer(
        settings=settings,
        token_service=token_service,
        user_service=user_service,
        job_service=JobService(job_repository),
        clock_service=ClockService(
            clock_repository=clock_repository,
            job_repository=job_repository,
            clock=clock,
        ),
        report_service=ReportService(clock_repository, clock=clock),
        admin_service=AdminService(
            InMemoryAdminRepository(user_repository=user_repository, records=records)
        ),
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))

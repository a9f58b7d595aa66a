"""Admin service for account and usage reporting."""

from dataclasses import dataclass
from typing import Protocol

from timesheet_tracker.domain.admin import AdminUser, RecordCounts


class AdminRepository(Protocol):
    """Persistence interface for admin data."""

    def list_users(self) -> list[AdminUser]:
        """Return all users, newest first."""

    def list_record_counts(self) -> dict[int, RecordCounts]:
        """Return clock record counts keyed by user id."""


@dataclass
class AdminService:
    """Service for the admin dashboard."""

    admin_repository: AdminRepository

    def list_users(self) -> dict[str, object]:
        """Return users with usage counts and an overall summary."""
        users = self.admin_repository.list_users()
        counts = self.admin_repository.list_record_counts()
        summaries = []
        for user in users:
            user_counts = counts.get(user.id, RecordCounts())
            summaries.append(
                {
                    "id": user.id,
                    "username": user.username,
                    "email": user.email,
                    "isAdmin": user.is_admin,
                    "createdAt": user.created_at.isoformat()
                    if user.created_at
                    else None,
                    "totalRecords": user_counts.total,
                    "completedRecords": user_counts.completed,
                }
            )
        total = sum(c.total for c in counts.values())
        completed = sum(c.completed for c in counts.values())
        return {
            "users": summaries,
            "summary": {
                "totalUsers": len(users),
                "adminUsers": sum(1 for user in users if user.is_admin),
                "totalRecords": total,
                "completedRecords": completed,
                "openRecords": total - completed,
            },
        }

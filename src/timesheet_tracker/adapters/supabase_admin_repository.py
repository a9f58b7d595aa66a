"""Supabase admin data access."""

from dataclasses import dataclass
from datetime import datetime

from postgrest.exceptions import APIError
from supabase import Client

from timesheet_tracker.adapters.supabase_errors import storage_error
from timesheet_tracker.domain.admin import AdminUser, RecordCounts
from timesheet_tracker.services.admin import AdminRepository


@dataclass
class SupabaseAdminRepository(AdminRepository):
    """Supabase implementation for admin queries."""

    client: Client

    def list_users(self) -> list[AdminUser]:
        """Return all users ordered by creation time, newest first."""
        try:
            response = (
                self.client.table("users")
                .select("id, username, email, is_admin, created_at")
                .order("created_at", desc=True)
                .execute()
            )
        except APIError as exc:
            raise storage_error(exc, "list users") from exc
        users = []
        for row in response.data or []:
            created = row.get("created_at")
            users.append(
                AdminUser(
                    id=int(row["id"]),
                    username=row["username"],
                    email=row["email"],
                    is_admin=bool(row.get("is_admin")),
                    created_at=datetime.fromisoformat(created)
                    if isinstance(created, str) and created
                    else None,
                )
            )
        return users

    def list_record_counts(self) -> dict[int, RecordCounts]:
        """Return per-user record counts aggregated in the database."""
        try:
            response = self.client.rpc("user_record_counts", {}).execute()
        except APIError as exc:
            raise storage_error(exc, "count clock records") from exc
        return {
            int(row["user_id"]): RecordCounts(
                total=int(row.get("total_records") or 0),
                completed=int(row.get("completed_records") or 0),
            )
            for row in response.data or []
        }

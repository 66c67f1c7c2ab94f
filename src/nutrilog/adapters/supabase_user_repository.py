"""Supabase-backed user repository."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_queries import execute, first_row
from nutrilog.domain.errors import StorageError
from nutrilog.domain.models import UserRecord
from nutrilog.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""
        response = execute(
            self.client.table("users")
            .select("id, username, password_hash")
            .eq("username", username)
            .limit(1)
        )
        row = first_row(response)
        return _parse_user(row) if row else None

    def create_user(self, username: str, password_hash: str) -> UserRecord:
        """Create a new user row and return it."""
        response = execute(
            self.client.table("users").insert(
                {"username": username, "password_hash": password_hash}
            )
        )
        row = first_row(response)
        if row is None:
            raise StorageError("Failed to create user in Supabase")
        return _parse_user(row)

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Store a new password hash for the user."""
        execute(
            self.client.table("users")
            .update({"password_hash": password_hash})
            .eq("id", str(user_id))
        )


def _parse_user(row: dict[str, Any]) -> UserRecord:
    return UserRecord(
        id=UUID(row["id"]),
        username=str(row["username"]),
        password_hash=str(row["password_hash"]),
    )

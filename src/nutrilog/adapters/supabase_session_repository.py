"""Supabase-backed login session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_queries import execute, first_row, parse_datetime
from nutrilog.domain.errors import StorageError
from nutrilog.domain.sessions import SessionRecord
from nutrilog.services.sessions import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for sessions keyed by token hash."""

    client: Client

    def create_session(self, session: SessionRecord) -> None:
        """Insert a session row."""
        execute(
            self.client.table("sessions").insert(
                {
                    "id": session.token_hash,
                    "user_id": str(session.user_id),
                    "created_at": session.created_at.isoformat(),
                }
            )
        )

    def get_session(self, token_hash: str) -> SessionRecord | None:
        """Return the session stored under a token hash, if present."""
        response = execute(
            self.client.table("sessions")
            .select("id, user_id, created_at")
            .eq("id", token_hash)
            .limit(1)
        )
        row = first_row(response)
        if row is None:
            return None
        created_at = parse_datetime(row.get("created_at"))
        if created_at is None:
            raise StorageError("Session row has no created_at")
        return SessionRecord(
            token_hash=row["id"],
            user_id=UUID(row["user_id"]),
            created_at=created_at,
        )

    def delete_session(self, token_hash: str) -> None:
        """Delete a session row."""
        execute(self.client.table("sessions").delete().eq("id", token_hash))

    def delete_sessions_created_before(self, cutoff: datetime) -> int:
        """Delete sessions created before the cutoff."""
        response = execute(
            self.client.table("sessions")
            .delete()
            .lt("created_at", cutoff.isoformat())
        )
        return len(response.data or [])

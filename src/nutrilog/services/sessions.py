"""Login sessions backed by hashed bearer tokens."""

import hashlib
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrilog.domain.sessions import SessionRecord
from nutrilog.services.clock import utc_now

SESSION_DAYS = 7
TOKEN_BYTES = 32

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for login sessions."""

    def create_session(self, session: SessionRecord) -> None:
        """Store a session row."""

    def get_session(self, token_hash: str) -> SessionRecord | None:
        """Return the session for a token hash, if present."""

    def delete_session(self, token_hash: str) -> None:
        """Delete a session; deleting a missing row is not an error."""

    def delete_sessions_created_before(self, cutoff: datetime) -> int:
        """Delete sessions created before ``cutoff`` and return how many."""


def hash_token(token: str) -> str:
    """Return the hex SHA-256 digest under which a token is stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass
class SessionService:
    """Issues, resolves and expires session tokens.

    Only ``hash_token(token)`` is persisted, so the plaintext token exists
    server-side only in the response to ``create``.
    """

    repository: SessionRepository
    session_days: int = SESSION_DAYS
    clock: Callable[[], datetime] = utc_now

    def create(self, user_id: UUID) -> str:
        """Start a session for the user and return its token."""
        token = secrets.token_urlsafe(TOKEN_BYTES)
        self.repository.create_session(
            SessionRecord(
                token_hash=hash_token(token),
                user_id=user_id,
                created_at=self.clock(),
            )
        )
        return token

    def resolve(self, token: str | None) -> UUID | None:
        """Return the user id for a token, or ``None`` if absent or expired."""
        if not token:
            return None
        session = self.repository.get_session(hash_token(token))
        if session is None:
            return None
        if self._is_expired(session, self.session_days):
            return None
        return session.user_id

    def delete(self, token: str | None) -> None:
        """End the session for a token."""
        if not token:
            return
        self.repository.delete_session(hash_token(token))

    def purge_expired(self, max_age_days: int | None = None) -> int:
        """Delete every session older than ``max_age_days``."""
        days = self.session_days if max_age_days is None else max_age_days
        cutoff = self.clock() - timedelta(days=days)
        removed = self.repository.delete_sessions_created_before(cutoff)
        if removed:
            _logger.info("Purged %s expired sessions", removed)
        return removed

    def _is_expired(self, session: SessionRecord, max_age_days: int) -> bool:
        return self.clock() - session.created_at > timedelta(days=max_age_days)

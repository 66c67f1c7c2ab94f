"""Domain models for login sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SessionRecord:
    """A persisted session, keyed by the hash of its token."""

    token_hash: str
    user_id: UUID
    created_at: datetime

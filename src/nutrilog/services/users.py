"""User accounts and password login."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from nutrilog.domain.errors import CredentialError
from nutrilog.domain.models import UserRecord
from nutrilog.services.credentials import CredentialService

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the username, if present."""

    def create_user(self, username: str, password_hash: str) -> UserRecord:
        """Create and return a new user record."""

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash of a user."""


@dataclass
class UserService:
    """Application service for accounts and login."""

    repository: UserRepository
    credentials: CredentialService
    _dummy_hash: str | None = field(default=None, init=False, repr=False)

    def create_user(self, username: str, password: str) -> UserRecord:
        """Create a user with a hashed password."""
        return self.repository.create_user(
            username, self.credentials.hash_password(password)
        )

    def authenticate(self, username: str, password: str) -> UserRecord | None:
        """Return the user when the credentials are valid, otherwise ``None``.

        Unknown usernames, wrong passwords and corrupt stored hashes all yield
        ``None``.
        """
        user = self.repository.get_by_username(username)
        if user is None:
            # Spend the same hashing time as a real check.
            self.credentials.verify_password(password, self._get_dummy_hash())
            return None
        try:
            valid = self.credentials.verify_password(password, user.password_hash)
        except CredentialError:
            _logger.warning("Stored password hash is unusable for user %s", user.id)
            return None
        if not valid:
            return None
        if self.credentials.needs_rehash(user.password_hash):
            self.repository.update_password_hash(
                user.id, self.credentials.hash_password(password)
            )
            _logger.info("Upgraded password hash for user %s", user.id)
        return user

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.credentials.hash_password("nutrilog-dummy")
        return self._dummy_hash

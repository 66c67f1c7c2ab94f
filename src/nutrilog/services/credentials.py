"""Password hashing with Argon2."""

from dataclasses import dataclass, field

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from nutrilog.domain.errors import CredentialError


@dataclass
class CredentialService:
    """Hashes and verifies passwords.

    Hashes are PHC strings (``$argon2id$v=19$m=...,t=...,p=...$salt$digest``)
    so the algorithm, cost parameters and per-password salt travel with the
    digest.
    """

    hasher: PasswordHasher = field(default_factory=PasswordHasher)

    def hash_password(self, plaintext: str) -> str:
        """Hash a password with a fresh random salt."""
        return self.hasher.hash(plaintext)

    def verify_password(self, plaintext: str, password_hash: str) -> bool:
        """Return whether the password matches the stored hash.

        Raises ``CredentialError`` when the stored hash cannot be parsed.
        """
        try:
            return self.hasher.verify(password_hash, plaintext)
        except VerifyMismatchError:
            return False
        except InvalidHashError as exc:
            raise CredentialError("Stored password hash is malformed") from exc
        except VerificationError as exc:
            raise CredentialError("Stored password hash cannot be verified") from exc

    def needs_rehash(self, password_hash: str) -> bool:
        """Return true when the hash was made with outdated parameters."""
        return self.hasher.check_needs_rehash(password_hash)

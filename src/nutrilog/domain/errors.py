"""Error kinds raised by the core services and adapters."""


class NutrilogError(Exception):
    """Base class for application errors."""


class NotFoundError(NutrilogError):
    """A lookup by id found no row."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(NutrilogError):
    """The underlying store failed at the I/O or connection level."""


class UnauthorizedError(NutrilogError):
    """The session token is absent or unresolvable."""


class ForbiddenError(NutrilogError):
    """The caller does not own the target row."""


class InvalidReferenceError(NutrilogError):
    """A consumable reference has an unknown type or names no single target."""


class ReferenceConflictError(NutrilogError):
    """A row cannot be deleted while other rows still reference it."""


class CredentialError(NutrilogError):
    """A stored password hash is malformed."""

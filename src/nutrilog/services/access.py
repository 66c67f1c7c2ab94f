"""Ownership checks for rows fetched by id."""

from typing import TypeVar
from uuid import UUID

from nutrilog.domain.errors import ForbiddenError, NotFoundError

_T = TypeVar("_T")


def require_owned(entity: str, entity_id: UUID, row: _T | None, user_id: UUID) -> _T:
    """Return the row if it exists and belongs to the caller."""
    if row is None:
        raise NotFoundError(entity, entity_id)
    if row.user_id != user_id:  # type: ignore[attr-defined]
        raise ForbiddenError(f"{entity} {entity_id} belongs to another user")
    return row

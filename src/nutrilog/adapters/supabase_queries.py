"""Shared helpers for Supabase repositories."""

from datetime import date, datetime
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from nutrilog.domain.errors import ReferenceConflictError, StorageError
from nutrilog.domain.nutrition import FlagUpdate, MacroProfile

# Postgres SQLSTATE for foreign key violations (ON DELETE RESTRICT).
FOREIGN_KEY_VIOLATION = "23503"


def execute(query: Any) -> Any:
    """Run a PostgREST query, translating failures into domain errors."""
    try:
        return query.execute()
    except APIError as exc:
        if exc.code == FOREIGN_KEY_VIOLATION:
            message = exc.message or "Row is still referenced"
            raise ReferenceConflictError(message) from exc
        raise StorageError(f"Supabase request failed: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise StorageError(f"Supabase is unreachable: {exc}") from exc


def first_row(response: Any) -> dict[str, Any] | None:
    """Return the first row of a response, if any."""
    if not response.data:
        return None
    return response.data[0]


def parse_datetime(raw: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def parse_date(raw: object) -> date:
    """Parse a date column, tolerating full timestamps."""
    return date.fromisoformat(str(raw)[:10])


def parse_macros(row: dict[str, Any] | None) -> MacroProfile:
    """Read the four macro columns of a food row."""
    row = row or {}
    return MacroProfile(
        kcal=float(row.get("kcal") or 0.0),
        fat=float(row.get("fat") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        protein=float(row.get("protein") or 0.0),
    )


def macro_columns(macros: MacroProfile) -> dict[str, float]:
    """Return the macro columns for an insert or update payload."""
    return {
        "kcal": macros.kcal,
        "fat": macros.fat,
        "carbs": macros.carbs,
        "protein": macros.protein,
    }


def insert_flag(update: FlagUpdate, now: datetime) -> str | None:
    """Return the initial value of a flag timestamp column."""
    return now.isoformat() if update is FlagUpdate.SET else None


def flag_columns(flags: dict[str, FlagUpdate], now: datetime) -> dict[str, str | None]:
    """Return update columns for first-set-wins flags.

    SET writes ``now`` and CLEAR writes null; LEAVE omits the column. The
    ``keep_first_flag_timestamps`` trigger keeps a timestamp that is already
    set.
    """
    columns: dict[str, str | None] = {}
    for column, update in flags.items():
        if update is FlagUpdate.SET:
            columns[column] = now.isoformat()
        elif update is FlagUpdate.CLEAR:
            columns[column] = None
    return columns


def has_rows(client: Client, table: str, column: str, value: str) -> bool:
    """Return true when any row of ``table`` has ``column == value``."""
    response = execute(
        client.table(table).select("id").eq(column, value).limit(1)
    )
    return bool(response.data)

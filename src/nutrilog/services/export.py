"""Full account export."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from nutrilog.services.clock import utc_now

EXPORT_SECTIONS = ("weights", "foods", "recipes", "ingredients", "consumptions")

_logger = logging.getLogger(__name__)


class ExportRepository(Protocol):
    """Read interface for raw user rows."""

    def fetch_user_rows(self, user_id: UUID) -> dict[str, list[dict[str, object]]]:
        """Return the user's stored rows keyed by section name."""


@dataclass
class ExportService:
    """Builds a point-in-time snapshot of everything a user has stored."""

    repository: ExportRepository
    clock: Callable[[], datetime] = utc_now

    def export_all(self, user_id: UUID) -> dict[str, object]:
        """Return the user's weights, foods, recipes, ingredients and consumptions."""
        rows = self.repository.fetch_user_rows(user_id)
        document: dict[str, object] = {
            "user_id": str(user_id),
            "exported_at": self.clock().isoformat(),
        }
        for section in EXPORT_SECTIONS:
            document[section] = rows.get(section, [])
        _logger.info(
            "Exported account %s (%s rows)",
            user_id,
            sum(len(rows.get(section, [])) for section in EXPORT_SECTIONS),
        )
        return document

    def filename(self, day: date | None = None) -> str:
        """Return the download filename for an export made on ``day``."""
        return f"{(day or self.clock().date()).isoformat()}-nutrilog.json"

"""Water intake tracking."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from diet_tracker.domain.results import WriteFailure
from diet_tracker.domain.water import WaterEntry

_logger = logging.getLogger(__name__)

MAX_GLASSES = 50


class WaterRepository(Protocol):
    """Persistence interface for water entries."""

    def get_entry(self, user_id: str, day: date) -> WaterEntry | None:
        """Return the entry for a user and day."""

    def upsert_entry(self, entry: WaterEntry) -> WaterEntry:
        """Insert or replace the entry for ``(user_id, day)``."""


@dataclass
class WaterService:
    """Records glasses of water per civil date."""

    repository: WaterRepository

    def log_intake(
        self, user_id: str, glasses: int, day: date
    ) -> WaterEntry | WriteFailure:
        """Set the number of glasses for a day."""
        if glasses < 0 or glasses > MAX_GLASSES:
            return WriteFailure.invalid(
                "glasses", f"Glasses must be between 0 and {MAX_GLASSES}"
            )
        entry = WaterEntry(user_id=user_id, day=day, glasses_consumed=glasses)
        try:
            return self.repository.upsert_entry(entry)
        except Exception:
            _logger.exception("Failed to log water intake for %s", user_id)
            return WriteFailure.storage("Could not save water intake")

    def get_intake(self, user_id: str, day: date) -> int:
        """Return glasses for a day, 0 when nothing is stored."""
        try:
            entry = self.repository.get_entry(user_id, day)
        except Exception as exc:
            _logger.warning("Failed to load water intake for %s: %s", user_id, exc)
            return 0
        return entry.glasses_consumed if entry else 0

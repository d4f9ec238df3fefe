"""Domain models for water intake."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WaterEntry:
    """Glasses of water a user drank on one civil date."""

    user_id: str
    day: date
    glasses_consumed: int

"""Supabase repository for water intake."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from diet_tracker.domain.water import WaterEntry
from diet_tracker.services.water import WaterRepository


@dataclass
class SupabaseWaterRepository(WaterRepository):
    """Supabase implementation for water entries."""

    client: Client

    def get_entry(self, user_id: str, day: date) -> WaterEntry | None:
        """Return the entry for a user and day."""
        response = (
            self.client.table("water_entries")
            .select("user_id, date, glasses_consumed")
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def upsert_entry(self, entry: WaterEntry) -> WaterEntry:
        """Insert or replace the entry for the user and day."""
        response = (
            self.client.table("water_entries")
            .upsert(
                {
                    "user_id": entry.user_id,
                    "date": entry.day.isoformat(),
                    "glasses_consumed": entry.glasses_consumed,
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save water entry")
        return _parse_entry(response.data[0])


def _parse_entry(row: dict[str, object]) -> WaterEntry:
    return WaterEntry(
        user_id=str(row["user_id"]),
        day=date.fromisoformat(str(row["date"])),
        glasses_consumed=int(row.get("glasses_consumed") or 0),
    )

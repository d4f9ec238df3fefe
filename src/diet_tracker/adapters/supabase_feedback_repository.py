"""Supabase repository for user feedback."""

from dataclasses import dataclass

from supabase import Client

from diet_tracker.domain.feedback import FeedbackSubmission, StoredFeedback
from diet_tracker.services.feedback import FeedbackRepository


@dataclass
class SupabaseFeedbackRepository(FeedbackRepository):
    """Supabase implementation for feedback rows."""

    client: Client

    def create_feedback(
        self,
        user_id: str | None,
        submission: FeedbackSubmission,
        ist_date: str,
    ) -> StoredFeedback:
        """Insert a feedback row."""
        response = (
            self.client.table("user_feedback")
            .insert(
                {
                    "user_id": user_id,
                    "rating": submission.rating,
                    "category": submission.category,
                    "message": submission.message.strip(),
                    "user_email": submission.email,
                    "feedback_type": submission.feedback_type.value,
                    "ist_date": ist_date,
                    "metadata": submission.metadata,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store feedback")
        return _parse_feedback(response.data[0])

    def list_recent(
        self, limit: int, user_id: str | None = None
    ) -> list[StoredFeedback]:
        """Return the latest feedback rows, newest first."""
        query = self.client.table("user_feedback").select(
            "id, user_id, rating, category, ist_date"
        )
        if user_id:
            query = query.eq("user_id", user_id)
        response = query.order("created_at", desc=True).limit(limit).execute()
        return [_parse_feedback(row) for row in response.data or []]


def _parse_feedback(row: dict[str, object]) -> StoredFeedback:
    user_id = row.get("user_id")
    return StoredFeedback(
        id=str(row["id"]),
        user_id=str(user_id) if user_id else None,
        rating=int(row.get("rating") or 0),
        category=str(row.get("category") or ""),
        ist_date=str(row.get("ist_date") or ""),
    )

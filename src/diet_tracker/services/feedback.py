"""Feedback collection with an email fallback."""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from urllib.parse import quote
from zoneinfo import ZoneInfo

from diet_tracker.domain.feedback import (
    FEEDBACK_CATEGORIES,
    EmailFallback,
    FeedbackStats,
    FeedbackSubmission,
    StoredFeedback,
    WidgetHandle,
    WidgetUnavailable,
)
from diet_tracker.domain.nutrition import round_half_up
from diet_tracker.domain.results import WriteFailure
from diet_tracker.services.backoff import wait_until_ready
from diet_tracker.services.civil_time import civil_date_key

_logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
MAX_MESSAGE_LENGTH = 2000
STATS_WINDOW = 100


class FeedbackRepository(Protocol):
    """Persistence interface for feedback rows."""

    def create_feedback(
        self,
        user_id: str | None,
        submission: FeedbackSubmission,
        ist_date: str,
    ) -> StoredFeedback:
        """Insert a feedback row and return it."""

    def list_recent(
        self, limit: int, user_id: str | None = None
    ) -> list[StoredFeedback]:
        """Return the latest feedback rows, newest first."""


class ScriptChecker(Protocol):
    """Checks whether the widget script can be loaded."""

    async def is_reachable(self) -> bool:
        """Return True when the script answers."""


@dataclass
class FeedbackService:
    """Stores feedback and falls back to email when storage fails."""

    repository: FeedbackRepository
    timezone: ZoneInfo
    support_email: str

    def submit(
        self,
        user_id: str | None,
        submission: FeedbackSubmission,
        now: datetime | None = None,
    ) -> StoredFeedback | WriteFailure | EmailFallback:
        """Validate and store feedback."""
        failure = _validate(submission)
        if failure:
            return failure
        moment = now or datetime.now(tz=UTC)
        try:
            return self.repository.create_feedback(
                user_id, submission, civil_date_key(moment, self.timezone)
            )
        except Exception:
            _logger.exception("Failed to store feedback")
            return EmailFallback(
                mailto_url=build_mailto(self.support_email, submission),
                reason="Feedback could not be saved; send it by email instead",
            )

    def get_stats(self, user_id: str | None = None) -> FeedbackStats:
        """Summarize the latest feedback rows."""
        try:
            rows = self.repository.list_recent(STATS_WINDOW, user_id=user_id)
        except Exception as exc:
            _logger.warning("Failed to load feedback stats: %s", exc)
            return FeedbackStats(total=0, average_rating=0.0, by_category={})
        if not rows:
            return FeedbackStats(total=0, average_rating=0.0, by_category={})
        average = sum(row.rating for row in rows) / len(rows)
        return FeedbackStats(
            total=len(rows),
            average_rating=round_half_up(average, 1),
            by_category=dict(Counter(row.category for row in rows)),
        )


@dataclass
class FeedbackWidgetService:
    """Initializes the embedded feedback widget."""

    token: str | None
    script_url: str
    support_email: str
    checker: ScriptChecker
    attempts: int = 4
    initial_delay_seconds: float = 0.25

    async def initialize(self) -> WidgetHandle | WidgetUnavailable:
        """Return a usable widget handle or the reason it is unavailable."""
        if not self.token:
            return WidgetUnavailable(
                reason="Feedback widget is not configured",
                support_email=self.support_email,
            )
        ready = await wait_until_ready(
            self.checker.is_reachable,
            attempts=self.attempts,
            initial_delay_seconds=self.initial_delay_seconds,
        )
        if not ready:
            _logger.warning("Feedback widget script unreachable: %s", self.script_url)
            return WidgetUnavailable(
                reason="Feedback widget could not be loaded",
                support_email=self.support_email,
            )
        return WidgetHandle(token=self.token, script_url=self.script_url)


def build_mailto(address: str, submission: FeedbackSubmission) -> str:
    """Build a ``mailto:`` URL carrying the feedback as subject and body."""
    subject = f"Diet Tracker feedback: {submission.category}"
    lines = [
        f"Rating: {submission.rating}/{MAX_RATING}",
        f"Type: {submission.feedback_type.value}",
        "",
        submission.message,
    ]
    if submission.email:
        lines.extend(["", f"Reply to: {submission.email}"])
    body = "\n".join(lines)
    return f"mailto:{address}?subject={quote(subject)}&body={quote(body)}"


def _validate(submission: FeedbackSubmission) -> WriteFailure | None:
    if not MIN_RATING <= submission.rating <= MAX_RATING:
        return WriteFailure.invalid(
            "rating", f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        )
    if submission.category not in FEEDBACK_CATEGORIES:
        return WriteFailure.invalid("category", "Unknown feedback category")
    message = submission.message.strip()
    if not message:
        return WriteFailure.invalid("message", "Message is required")
    if len(message) > MAX_MESSAGE_LENGTH:
        return WriteFailure.invalid("message", "Message is too long")
    if submission.email and "@" not in submission.email:
        return WriteFailure.invalid("email", "Email address is invalid")
    return None

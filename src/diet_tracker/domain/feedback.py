"""Domain models for user feedback."""

from dataclasses import dataclass, field
from enum import StrEnum

FEEDBACK_CATEGORIES: tuple[str, ...] = (
    "General",
    "User Interface",
    "Performance",
    "Features",
    "Bug Report",
    "Other",
)


class FeedbackType(StrEnum):
    """Kind of feedback being sent."""

    GENERAL = "general"
    BUG = "bug"
    FEATURE = "feature"
    OTHER = "other"


@dataclass(frozen=True)
class FeedbackSubmission:
    """Feedback as entered by the user."""

    rating: int
    category: str
    message: str
    feedback_type: FeedbackType = FeedbackType.GENERAL
    email: str | None = None
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class StoredFeedback:
    """Feedback row after it was saved."""

    id: str
    user_id: str | None
    rating: int
    category: str
    ist_date: str


@dataclass(frozen=True)
class EmailFallback:
    """Email draft offered when feedback could not be stored."""

    mailto_url: str
    reason: str


@dataclass(frozen=True)
class FeedbackStats:
    """Aggregate view over recent feedback."""

    total: int
    average_rating: float
    by_category: dict[str, int]


@dataclass(frozen=True)
class WidgetHandle:
    """Feedback widget that is configured and reachable."""

    token: str
    script_url: str


@dataclass(frozen=True)
class WidgetUnavailable:
    """Feedback widget that cannot be used; clients fall back to email."""

    reason: str
    support_email: str

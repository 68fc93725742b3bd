"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional


class Sentiment(str, Enum):
    """Overall tone of a feedback item."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Urgency(str, Enum):
    """How soon a feedback item needs attention."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ClassificationResult:
    """Sentiment and urgency for one piece of feedback. Always fully populated."""

    sentiment: Sentiment
    urgency: Urgency


@dataclass
class FeedbackItem:
    """Customer feedback as held by the store."""

    id: str
    content: str
    source: str = "web"
    sentiment: Optional[Sentiment] = None
    urgency: Optional[Urgency] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ID cannot be empty")

    @property
    def is_classified(self) -> bool:
        return self.sentiment is not None and self.urgency is not None

    def apply(self, result: ClassificationResult) -> None:
        """Set sentiment and urgency together."""
        self.sentiment = result.sentiment
        self.urgency = result.urgency

    def projection(self) -> dict[str, Optional[str]]:
        """Fields shared with the summary prompt (no identity)."""
        return {
            "content": self.content,
            "sentiment": self.sentiment.value if self.sentiment else None,
            "urgency": self.urgency.value if self.urgency else None,
        }


@dataclass
class SummarySections:
    """Four fixed sections distilled from a narrative summary."""

    headline: str
    themes: list[str] = field(default_factory=list)
    critical_issues: list[str] = field(default_factory=list)
    recommendation: list[str] = field(default_factory=list)


@dataclass
class ClassifiedItem:
    """Item written back with its classification."""

    item_id: str
    result: ClassificationResult


@dataclass
class ClassificationFailure:
    """Item that could not be classified or written back."""

    item_id: str
    message: str


@dataclass
class BatchClassificationReport:
    """Outcome of one batch classification run."""

    classified: list[ClassifiedItem] = field(default_factory=list)
    errors: list[ClassificationFailure] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.classified)


@dataclass
class DailySummary:
    """Sections for one day, ready for rendering."""

    summary_date: date
    item_count: int
    sections: SummarySections

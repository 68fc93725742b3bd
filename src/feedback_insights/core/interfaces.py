"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from feedback_insights.core.entities import (
    ClassificationResult,
    FeedbackItem,
    SummarySections,
)


class Oracle(ABC):
    """Interface for the generative text-inference service."""

    @abstractmethod
    async def run(self, prompt: str, system: str = "") -> Any:
        """Run a prompt and return the raw response envelope."""
        pass


class FeedbackStore(ABC):
    """Interface for feedback storage."""

    @abstractmethod
    def fetch_unclassified(self, limit: int) -> list[FeedbackItem]:
        """Fetch items where sentiment or urgency is unset."""
        pass

    @abstractmethod
    def update_classification(self, item_id: str, result: ClassificationResult) -> None:
        """Write sentiment and urgency back for one item."""
        pass

    @abstractmethod
    def fetch_classified(self, day: date) -> list[FeedbackItem]:
        """Fetch classified items created on the given day."""
        pass


class SummaryRenderer(ABC):
    """Interface for rendering summaries for display."""

    @abstractmethod
    async def render(self, sections: SummarySections, summary_date: date, item_count: int) -> str:
        """Render summary sections."""
        pass

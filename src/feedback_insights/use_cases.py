"""Business logic use cases."""

from datetime import date
from pathlib import Path
from typing import Optional

from feedback_insights.config import SummaryConfig
from feedback_insights.core import (
    BatchClassificationReport,
    ClassificationFailure,
    ClassifiedItem,
    DailySummary,
    EmptyBatch,
    FeedbackItem,
    FeedbackStore,
    SummaryRenderer,
    SummarySections,
)
from feedback_insights.pipeline import FeedbackClassifier, SummaryExtractor, parse_sections


class ClassificationService:
    """Classify pending feedback and write results back to the store."""

    def __init__(
        self,
        classifier: FeedbackClassifier,
        store: FeedbackStore,
        batch_size: int = 10,
    ) -> None:
        self.classifier = classifier
        self.store = store
        self.batch_size = batch_size

    async def classify_pending(self) -> BatchClassificationReport:
        """Classify up to ``batch_size`` unclassified items.

        A failing item is recorded in the report and does not stop the others.
        Failure to fetch the batch itself propagates as ``StorageError``.
        """
        items = self.store.fetch_unclassified(self.batch_size)
        report = BatchClassificationReport()

        print(f"Classifying {len(items)} items sequentially...")

        for i, item in enumerate(items, 1):
            preview = item.content[:70].replace("\n", " ")
            print(f"\n  [{i}/{len(items)}] 💬 {preview}...")

            try:
                result = await self.classifier.classify(item.content)
                self.store.update_classification(item.id, result)
            except Exception as e:
                print(f"  ⚠️  Error: {e}")
                report.errors.append(ClassificationFailure(item_id=item.id, message=str(e)))
                continue

            print(f"  ✓ {result.sentiment.value} / {result.urgency.value}")
            report.classified.append(ClassifiedItem(item_id=item.id, result=result))

        return report


class SummaryService:
    """Build daily summaries from classified feedback."""

    def __init__(
        self,
        extractor: SummaryExtractor,
        store: FeedbackStore,
        renderer: SummaryRenderer,
        summary_config: Optional[SummaryConfig] = None,
    ) -> None:
        self.extractor = extractor
        self.store = store
        self.renderer = renderer
        self.summary_config = summary_config or SummaryConfig()

    async def summarize(self, items: list[FeedbackItem]) -> SummarySections:
        """Ask the oracle for a narrative summary and split it into sections."""
        text = await self.extractor.extract(items)
        return parse_sections(text, self.summary_config)

    async def daily_summary(self, day: date) -> DailySummary:
        """Summarize feedback classified for the given day."""
        items = self.store.fetch_classified(day)
        if not items:
            raise EmptyBatch(f"No classified feedback for {day.isoformat()}")

        sections = await self.summarize(items)
        return DailySummary(summary_date=day, item_count=len(items), sections=sections)

    async def render(self, daily: DailySummary) -> str:
        return await self.renderer.render(daily.sections, daily.summary_date, daily.item_count)

    def save_summary(self, summary: str, output_path: Path) -> None:
        """Save rendered summary to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(summary, encoding="utf-8")
        print(f"Summary saved to {output_path}")

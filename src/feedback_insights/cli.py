"""CLI entry point for feedback insights."""

import asyncio
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from feedback_insights.adapters.llm import ClaudeOracle, HTTPOracle, WorkersAIOracle
from feedback_insights.adapters.render import MarkdownSummaryRenderer
from feedback_insights.adapters.storage import YamlFeedbackStore
from feedback_insights.config import Settings, get_settings
from feedback_insights.core import FeedbackInsightsError
from feedback_insights.pipeline import FeedbackClassifier, SummaryExtractor
from feedback_insights.use_cases import ClassificationService, SummaryService

app = typer.Typer(help="Classify customer feedback and build daily summaries.")

CONFIG_OPTION = typer.Option(Path("config.yaml"), "--config", help="Path to YAML config")


def create_oracle(settings: Settings) -> HTTPOracle:
    """Build the oracle selected by ``oracle.provider``."""
    provider = settings.oracle.provider
    if provider == "claude":
        return ClaudeOracle(settings)
    if provider == "workers_ai":
        return WorkersAIOracle(settings)
    raise FeedbackInsightsError(f"Unknown oracle provider: {provider}")


def _fail(error: Exception) -> None:
    print(f"❌ {error}")
    raise typer.Exit(code=1)


def _print_header(title: str) -> None:
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


@app.command()
def ingest(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text file, one feedback item per line"),
    source: str = typer.Option("web", help="Channel the feedback came from"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Add feedback items to the store."""
    lines = [line.strip() for line in file.read_text(encoding="utf-8").splitlines()]
    contents = [line for line in lines if line]

    try:
        settings = get_settings(config)
        items = YamlFeedbackStore(settings.storage_path).add_many(contents, source=source)
    except FeedbackInsightsError as e:
        _fail(e)

    print(f"✓ Added {len(items)} feedback items to {settings.storage_path}")


@app.command()
def classify(
    limit: Optional[int] = typer.Option(None, help="Batch size (defaults to storage.batch_size)"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Classify pending feedback."""
    try:
        asyncio.run(async_classify(get_settings(config), limit))
    except FeedbackInsightsError as e:
        _fail(e)


async def async_classify(settings: Settings, limit: Optional[int]) -> None:
    """Async implementation of classify command."""
    _print_header("🏷️  FEEDBACK CLASSIFICATION")

    if settings.oracle.provider == "claude" and not settings.anthropic_api_key:
        print("  ⚠️  ANTHROPIC_API_KEY not found (keyword fallback will be used)")

    service = ClassificationService(
        classifier=FeedbackClassifier(
            create_oracle(settings),
            keywords=settings.classifier,
            prompts=settings.prompts,
        ),
        store=YamlFeedbackStore(settings.storage_path),
        batch_size=limit or settings.batch_size,
    )

    report = await service.classify_pending()

    _print_header("📊 RESULTS")
    print(f"✓ Classified: {report.success_count}")
    if report.errors:
        print(f"⚠️  Errors: {len(report.errors)}")
        for failure in report.errors:
            print(f"  • {failure.item_id}: {failure.message}")


@app.command()
def summary(
    day: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="UTC day to summarize (defaults to today in UTC)"),
    output: Optional[Path] = typer.Option(None, help="Where to save the markdown summary"),
    save: bool = typer.Option(False, "--save", help="Save to paths.output_dir"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Build the daily summary."""
    summary_day = day.date() if day else datetime.now(timezone.utc).date()
    try:
        asyncio.run(async_summary(get_settings(config), summary_day, output, save))
    except FeedbackInsightsError as e:
        _fail(e)


async def async_summary(settings: Settings, summary_day: date, output: Optional[Path], save: bool) -> None:
    """Async implementation of summary command."""
    _print_header(f"📝 DAILY SUMMARY {summary_day.strftime('%d.%m.%Y')}")

    service = SummaryService(
        extractor=SummaryExtractor(create_oracle(settings), prompts=settings.prompts),
        store=YamlFeedbackStore(settings.storage_path),
        renderer=MarkdownSummaryRenderer(),
        summary_config=settings.summary,
    )

    daily = await service.daily_summary(summary_day)
    rendered = await service.render(daily)

    print()
    print(rendered)

    if output is None and save:
        output = settings.output_dir / f"{summary_day.isoformat()}_summary.md"
    if output is not None:
        service.save_summary(rendered, output)


@app.command("list")
def list_items(
    limit: int = typer.Option(20, help="Maximum number of items to show"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Show stored feedback."""
    try:
        store = YamlFeedbackStore(get_settings(config).storage_path)
        items = store.list_items(limit)
        stats = store.get_stats()
    except FeedbackInsightsError as e:
        _fail(e)

    for item in items:
        label = f"{item.sentiment.value}/{item.urgency.value}" if item.is_classified else "unclassified"
        print(f"  [{item.created_at.strftime('%Y-%m-%d %H:%M')}] {label:<16} {item.content[:60]}")

    print(f"\nTotal: {stats['total']}, unclassified: {stats['unclassified']}")
    for sentiment, count in stats["by_sentiment"].items():
        print(f"  • {sentiment}: {count}")


if __name__ == "__main__":
    app()

"""Feedback store backed by a single YAML file."""

import uuid
from collections import Counter
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from feedback_insights.core import (
    ClassificationResult,
    FeedbackItem,
    FeedbackStore,
    Sentiment,
    StorageError,
    Urgency,
)


def _enum_or_none(enum_cls, value: Any):
    try:
        return enum_cls(value) if value is not None else None
    except ValueError:
        return None


class YamlFeedbackStore(FeedbackStore):
    """Keep feedback items as a list of records in one YAML file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def add(self, content: str, source: str = "web") -> FeedbackItem:
        """Store one new, unclassified feedback item."""
        return self.add_many([content], source)[0]

    def add_many(self, contents: Iterable[str], source: str = "web") -> list[FeedbackItem]:
        """Store several new feedback items in one write."""
        records = self._load()
        items = [
            FeedbackItem(id=uuid.uuid4().hex, content=content, source=source)
            for content in contents
        ]
        records.extend(self._to_record(item) for item in items)
        self._save(records)
        return items

    def fetch_unclassified(self, limit: int) -> list[FeedbackItem]:
        unclassified = [item for item in self._items() if not item.is_classified]
        return unclassified[:limit]

    def update_classification(self, item_id: str, result: ClassificationResult) -> None:
        records = self._load()
        for record in records:
            if str(record.get("id")) == item_id:
                record["sentiment"] = result.sentiment.value
                record["urgency"] = result.urgency.value
                self._save(records)
                return
        raise StorageError(f"Feedback item not found: {item_id}")

    def fetch_classified(self, day: date) -> list[FeedbackItem]:
        return [
            item for item in self._items()
            if item.is_classified and item.created_at.astimezone(timezone.utc).date() == day
        ]

    def list_items(self, limit: int = 20) -> list[FeedbackItem]:
        """Most recent items first."""
        items = sorted(self._items(), key=lambda i: i.created_at, reverse=True)
        return items[:limit]

    def get_stats(self) -> dict:
        """Get counts by classification state."""
        items = self._items()
        classified = [item for item in items if item.is_classified]

        return {
            "total": len(items),
            "unclassified": len(items) - len(classified),
            "by_sentiment": dict(Counter(item.sentiment.value for item in classified)),
            "by_urgency": dict(Counter(item.urgency.value for item in classified)),
        }

    def _items(self) -> list[FeedbackItem]:
        return [self._to_item(record) for record in self._load()]

    def _load(self) -> list[dict]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(f"Could not read feedback store {self.path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageError(f"Feedback store {self.path} must contain a list of items")
        return data

    def _save(self, records: list[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.dump(records, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise StorageError(f"Could not write feedback store {self.path}: {e}") from e

    def _to_item(self, record: dict) -> FeedbackItem:
        try:
            created_at = self._parse_timestamp(record.get("created_at"))
            return FeedbackItem(
                id=str(record["id"]),
                content=str(record.get("content", "")),
                source=str(record.get("source", "web")),
                sentiment=_enum_or_none(Sentiment, record.get("sentiment")),
                urgency=_enum_or_none(Urgency, record.get("urgency")),
                created_at=created_at,
            )
        except (AttributeError, KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Malformed feedback record in {self.path}: {record!r}") from e

    @staticmethod
    def _parse_timestamp(value: Optional[Any]) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif value:
            parsed = datetime.fromisoformat(str(value))
        else:
            return datetime.now(timezone.utc)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @staticmethod
    def _to_record(item: FeedbackItem) -> dict:
        return {
            "id": item.id,
            "source": item.source,
            "content": item.content,
            "sentiment": item.sentiment.value if item.sentiment else None,
            "urgency": item.urgency.value if item.urgency else None,
            "created_at": item.created_at.isoformat(),
        }

"""Core domain layer."""

from feedback_insights.core.entities import (
    BatchClassificationReport,
    ClassificationFailure,
    ClassificationResult,
    ClassifiedItem,
    DailySummary,
    FeedbackItem,
    Sentiment,
    SummarySections,
    Urgency,
)
from feedback_insights.core.errors import (
    ConfigError,
    EmptyBatch,
    FeedbackInsightsError,
    InvalidInput,
    OracleError,
    StorageError,
)
from feedback_insights.core.interfaces import FeedbackStore, Oracle, SummaryRenderer

__all__ = [
    "FeedbackItem",
    "Sentiment",
    "Urgency",
    "ClassificationResult",
    "SummarySections",
    "ClassifiedItem",
    "ClassificationFailure",
    "BatchClassificationReport",
    "DailySummary",
    "ConfigError",
    "FeedbackInsightsError",
    "InvalidInput",
    "EmptyBatch",
    "OracleError",
    "StorageError",
    "Oracle",
    "FeedbackStore",
    "SummaryRenderer",
]

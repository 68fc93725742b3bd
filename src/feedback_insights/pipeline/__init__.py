"""Classification and summary pipeline."""

from feedback_insights.pipeline.classifier import (
    FeedbackClassifier,
    fallback_classification,
    normalize,
    parse_candidate,
)
from feedback_insights.pipeline.responses import unwrap_response
from feedback_insights.pipeline.sections import extract_bullets, parse_sections
from feedback_insights.pipeline.summary import SummaryExtractor

__all__ = [
    "FeedbackClassifier",
    "SummaryExtractor",
    "fallback_classification",
    "normalize",
    "parse_candidate",
    "unwrap_response",
    "parse_sections",
    "extract_bullets",
]

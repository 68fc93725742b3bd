"""Storage adapters."""

from feedback_insights.adapters.storage.yaml_store import YamlFeedbackStore

__all__ = ["YamlFeedbackStore"]

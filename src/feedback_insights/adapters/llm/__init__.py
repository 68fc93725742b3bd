"""Oracle adapters."""

from feedback_insights.adapters.llm.base import HTTPOracle
from feedback_insights.adapters.llm.claude_client import ClaudeOracle
from feedback_insights.adapters.llm.workers_ai_client import WorkersAIOracle

__all__ = ["HTTPOracle", "ClaudeOracle", "WorkersAIOracle"]

"""Summary renderers."""

from feedback_insights.adapters.render.markdown_renderer import MarkdownSummaryRenderer

__all__ = ["MarkdownSummaryRenderer"]

"""Markdown summary renderer."""

from datetime import date

from feedback_insights.core import SummaryRenderer, SummarySections


class MarkdownSummaryRenderer(SummaryRenderer):
    """Render summary sections as a markdown report."""

    empty_section = "_Nothing reported._"

    async def render(self, sections: SummarySections, summary_date: date, item_count: int) -> str:
        """Generate markdown summary."""
        lines = [
            f"# Customer Feedback Summary — {summary_date.strftime('%d.%m.%Y')}",
            "",
            f"Feedback analyzed: {item_count}",
            "",
            "## 📰 Headline",
            "",
            sections.headline,
            "",
        ]

        lines.extend(self._format_section("🔑 Key Themes", sections.themes))
        lines.extend(self._format_section("🚨 Critical Issues", sections.critical_issues))
        lines.extend(self._format_section("✅ Recommendation", sections.recommendation))

        return "\n".join(lines)

    def _format_section(self, title: str, bullets: list[str]) -> list[str]:
        """Format single section."""
        lines = [f"## {title}", ""]
        if bullets:
            lines.extend(f"- {bullet}" for bullet in bullets)
        else:
            lines.append(self.empty_section)
        lines.append("")
        return lines

"""Parsing of narrative summaries into fixed sections.

The oracle is asked for a strict template but does not always follow it, so
every section is located by an ordered tuple of matchers (bold header,
markdown heading, plain label) and missing sections degrade to empty lists
and a placeholder headline instead of failing.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from feedback_insights.config import SummaryConfig
from feedback_insights.core import SummarySections
from feedback_insights.pipeline.matching import first_match


@dataclass(frozen=True)
class SectionLabels:
    """Header aliases for one section."""

    name: str
    aliases: tuple[str, ...]


HEADLINE = SectionLabels("headline", (r"Summary", r"Headline"))
THEMES = SectionLabels("themes", (r"Key\s+Themes", r"Top\s*3\s+Themes", r"Themes"))
CRITICAL_ISSUES = SectionLabels("critical_issues", (r"Critical\s+Issues",))
RECOMMENDATION = SectionLabels("recommendation", (r"Recommendations?",))

SECTIONS = (HEADLINE, THEMES, CRITICAL_ISSUES, RECOMMENDATION)

_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE

_NEXT_BOLD = r"\n[ \t]*\*\*[^*\n]+\*\*"
_NEXT_HEADING = r"\n[ \t]*#{1,6}[ \t]"


def _alternation(aliases: tuple[str, ...]) -> str:
    return "(?:" + "|".join(aliases) + ")"


_ALL_LABELS = _alternation(tuple(alias for section in SECTIONS for alias in section.aliases))


def _matcher(pattern: str) -> Callable[[str], Optional[str]]:
    compiled = re.compile(pattern, _FLAGS)

    def match(text: str) -> Optional[str]:
        found = compiled.search(text)
        return found.group(1) if found else None

    return match


def bold_header(aliases: tuple[str, ...]) -> Callable[[str], Optional[str]]:
    """``**Summary**`` up to the next bold header."""
    return _matcher(
        rf"\*\*[ \t]*{_alternation(aliases)}[ \t]*:?[ \t]*\*\*[ \t]*:?(.*?)(?={_NEXT_BOLD}|\Z)"
    )


def markdown_heading(aliases: tuple[str, ...]) -> Callable[[str], Optional[str]]:
    """``## Summary`` up to the next heading or bold header."""
    return _matcher(
        rf"^[ \t]*#{{1,6}}[ \t]*{_alternation(aliases)}[ \t]*:?[ \t]*$(.*?)"
        rf"(?={_NEXT_HEADING}|{_NEXT_BOLD}|\Z)"
    )


def plain_label(aliases: tuple[str, ...]) -> Callable[[str], Optional[str]]:
    """``Summary:`` or ``Summary -`` up to the next header of any section."""
    return _matcher(
        rf"^[ \t]*{_alternation(aliases)}[ \t]*[:\-–][ \t]*(.*?)"
        rf"(?={_NEXT_BOLD}|{_NEXT_HEADING}|\n[ \t]*{_ALL_LABELS}[ \t]*[:\-–]|\Z)"
    )


def section_matchers(section: SectionLabels) -> tuple[Callable[[str], Optional[str]], ...]:
    return (
        bold_header(section.aliases),
        markdown_heading(section.aliases),
        plain_label(section.aliases),
    )


MATCHERS = {section.name: section_matchers(section) for section in SECTIONS}


def section_text(text: str, section: SectionLabels) -> Optional[str]:
    """Raw text of a section, or None if no header was found."""
    return first_match(MATCHERS[section.name], text)


_BULLET_MARKER = r"(?:•|[*+\-](?=[ \t]))"
_NUMBER_MARKER = r"\d+[.)](?=[ \t])"
_ITEM_END = rf"(?=\n[ \t]*(?:{_BULLET_MARKER}|{_NUMBER_MARKER})|\n[ \t]*\n|\Z)"

BULLET_PATTERN = re.compile(rf"^[ \t]*{_BULLET_MARKER}[ \t]*(.+?){_ITEM_END}", re.DOTALL | re.MULTILINE)
NUMBERED_PATTERN = re.compile(rf"^[ \t]*{_NUMBER_MARKER}[ \t]*(.+?){_ITEM_END}", re.DOTALL | re.MULTILINE)


def _clean(items: list[str]) -> list[str]:
    cleaned = (" ".join(item.split()) for item in items)
    return [item for item in cleaned if item]


def extract_bullets(text: str) -> list[str]:
    """Split section text into items.

    Bulleted and numbered items are matched independently and concatenated
    bullets first, so mixed lists do not keep source order. Text without any
    list markers falls back to one item per non-blank line.
    """
    bullets = _clean(BULLET_PATTERN.findall(text)) + _clean(NUMBERED_PATTERN.findall(text))
    if bullets:
        return bullets
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_sections(text: str, config: Optional[SummaryConfig] = None) -> SummarySections:
    """Parse a narrative summary. Never fails."""
    config = config or SummaryConfig()
    text = text or ""

    headline = (section_text(text, HEADLINE) or "").strip()

    def items(section: SectionLabels, limit: int) -> list[str]:
        return extract_bullets(section_text(text, section) or "")[:limit]

    return SummarySections(
        headline=headline or config.headline_placeholder,
        themes=items(THEMES, config.max_themes),
        critical_issues=items(CRITICAL_ISSUES, config.max_critical_issues),
        recommendation=items(RECOMMENDATION, config.max_recommendations),
    )

"""Sentiment and urgency classification with keyword fallback."""

import json
import re
from typing import Any, Optional

from feedback_insights.config import ClassifierConfig, PromptsConfig
from feedback_insights.core import (
    ClassificationResult,
    InvalidInput,
    Oracle,
    Sentiment,
    Urgency,
)
from feedback_insights.pipeline.responses import unwrap_response

SENTIMENTS = {s.value for s in Sentiment}
URGENCIES = {u.value for u in Urgency}

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _fix_json(text: str) -> str:
    """Remove trailing commas before } or ]."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


def parse_candidate(text: str) -> Optional[dict[str, Any]]:
    """Parse the first ``{...}`` span of an oracle reply, or None."""
    match = _JSON_OBJECT.search(text or "")
    if not match:
        return None
    try:
        candidate = json.loads(_fix_json(match.group(0)))
    except json.JSONDecodeError:
        return None
    return candidate if isinstance(candidate, dict) else None


def _contains_any(text: str, keywords: list[str]) -> bool:
    return any(keyword.lower() in text for keyword in keywords)


def fallback_classification(text: str, keywords: ClassifierConfig) -> dict[str, str]:
    """Deterministic keyword classification.

    Positive is tested before negative and high before medium; the neutral and
    low defaults apply only when no keyword matched.
    """
    lowered = text.lower()

    if _contains_any(lowered, keywords.positive_keywords):
        sentiment = Sentiment.POSITIVE.value
    elif _contains_any(lowered, keywords.negative_keywords):
        sentiment = Sentiment.NEGATIVE.value
    else:
        sentiment = Sentiment.NEUTRAL.value

    if _contains_any(lowered, keywords.high_urgency_keywords):
        urgency = Urgency.HIGH.value
    elif _contains_any(lowered, keywords.medium_urgency_keywords):
        urgency = Urgency.MEDIUM.value
    else:
        urgency = Urgency.LOW.value

    return {"sentiment": sentiment, "urgency": urgency}


def normalize(
    candidate: Optional[dict[str, Any]], text: str, keywords: ClassifierConfig
) -> ClassificationResult:
    """Turn an optional candidate into a well-formed result.

    A missing candidate is replaced by the keyword fallback. Values outside the
    closed enums (including wrong case) become neutral / low.
    """
    if candidate is None:
        candidate = fallback_classification(text, keywords)

    sentiment = candidate.get("sentiment")
    urgency = candidate.get("urgency")

    if not isinstance(sentiment, str) or sentiment not in SENTIMENTS:
        sentiment = Sentiment.NEUTRAL.value
    if not isinstance(urgency, str) or urgency not in URGENCIES:
        urgency = Urgency.LOW.value

    return ClassificationResult(sentiment=Sentiment(sentiment), urgency=Urgency(urgency))


class FeedbackClassifier:
    """Classify feedback through the oracle, falling back to keywords."""

    def __init__(
        self,
        oracle: Oracle,
        keywords: Optional[ClassifierConfig] = None,
        prompts: Optional[PromptsConfig] = None,
    ) -> None:
        self.oracle = oracle
        self.keywords = keywords or ClassifierConfig()
        self.prompts = prompts or PromptsConfig()

    def build_prompt(self, text: str) -> str:
        return self.prompts.classification.get("user", "").format(content=text)

    async def classify(self, text: str) -> ClassificationResult:
        """Classify one feedback text. Only empty input raises."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidInput("Feedback text cannot be empty")

        try:
            raw = await self.oracle.run(
                prompt=self.build_prompt(text),
                system=self.prompts.classification.get("system", ""),
            )
        except Exception as e:
            print(f"  ⚠️  Oracle unavailable, using keyword fallback: {type(e).__name__}: {e}")
            return normalize(None, text, self.keywords)

        response = unwrap_response(raw)
        candidate = parse_candidate(response)
        if candidate is None:
            preview = response[:200] + "..." if len(response) > 200 else response
            print(f"  ⚠️  No JSON in oracle reply, using keyword fallback: {preview!r}")

        return normalize(candidate, text, self.keywords)

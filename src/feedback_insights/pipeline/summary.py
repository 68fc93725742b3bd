"""Daily summary prompt construction and oracle call."""

import json
from typing import Optional

from feedback_insights.config import PromptsConfig
from feedback_insights.core import EmptyBatch, FeedbackItem, Oracle, OracleError
from feedback_insights.pipeline.responses import unwrap_response


class SummaryExtractor:
    """Ask the oracle for a four-section narrative summary of a batch."""

    def __init__(self, oracle: Oracle, prompts: Optional[PromptsConfig] = None) -> None:
        self.oracle = oracle
        self.prompts = prompts or PromptsConfig()

    def build_prompt(self, items: list[FeedbackItem]) -> str:
        """Embed the batch (content, sentiment and urgency only) in the summary prompt."""
        if not items:
            raise EmptyBatch("No classified feedback to summarize")

        entries = [item.projection() for item in items]
        prompt_template = self.prompts.summary.get("user", "")

        return prompt_template.format(
            entries_json=json.dumps(entries, ensure_ascii=False, indent=2),
            count=len(entries),
        )

    async def extract(self, items: list[FeedbackItem]) -> str:
        """Return the oracle's narrative text for the batch.

        Raises:
            EmptyBatch: the batch is empty; the oracle is not called.
            OracleError: the oracle call failed.
        """
        prompt = self.build_prompt(items)

        try:
            raw = await self.oracle.run(
                prompt=prompt,
                system=self.prompts.summary.get("system", ""),
            )
        except OracleError:
            raise
        except Exception as e:
            raise OracleError(f"Summary generation failed: {type(e).__name__}: {e}") from e

        return unwrap_response(raw)

"""Claude API oracle."""

from feedback_insights.adapters.llm.base import HTTPOracle
from feedback_insights.config import Settings


class ClaudeOracle(HTTPOracle):
    """Oracle backed by the Anthropic Messages API.

    Returns the full response envelope; text lives in its ``content`` blocks.
    """

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings.oracle)
        self.api_key = settings.anthropic_api_key
        self.model = settings.claude.model
        self.max_tokens = settings.claude.max_tokens
        self.temperature = settings.claude.temperature
        self.base_url = "https://api.anthropic.com/v1"

    def _build_request(self, prompt: str, system: str) -> tuple[str, dict, dict]:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [
                {"role": "user", "content": prompt}
            ],
        }
        if system:
            payload["system"] = system
        return f"{self.base_url}/messages", headers, payload

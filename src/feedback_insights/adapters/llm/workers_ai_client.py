"""Cloudflare Workers AI oracle."""

from typing import Any

from feedback_insights.adapters.llm.base import HTTPOracle
from feedback_insights.config import Settings
from feedback_insights.core import OracleError


class WorkersAIOracle(HTTPOracle):
    """Oracle backed by the Workers AI REST API.

    Text-generation models answer with ``{"response": ...}``; the gpt-oss
    models answer in Responses-API form with an ``output`` list.
    """

    def __init__(self, settings: Settings) -> None:
        super().__init__(settings.oracle)
        if not settings.cloudflare_account_id:
            raise OracleError("CLOUDFLARE_ACCOUNT_ID is required for Workers AI")
        self.api_token = settings.cloudflare_api_token
        self.model = settings.workers_ai.model
        self.base_url = (
            f"https://api.cloudflare.com/client/v4/accounts/{settings.cloudflare_account_id}/ai/run"
        )

    @property
    def uses_responses_api(self) -> bool:
        return self.model.startswith("@cf/openai/")

    def _build_request(self, prompt: str, system: str) -> tuple[str, dict, dict]:
        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "content-type": "application/json",
        }
        if self.uses_responses_api:
            payload: dict[str, Any] = {"input": prompt}
            if system:
                payload["instructions"] = system
        else:
            messages = [{"role": "user", "content": prompt}]
            if system:
                messages.insert(0, {"role": "system", "content": system})
            payload = {"messages": messages}
        return f"{self.base_url}/{self.model}", headers, payload

    def _unwrap_envelope(self, data: Any) -> Any:
        """Return the ``result`` member of the REST envelope."""
        if not isinstance(data, dict) or "result" not in data:
            return data
        if data.get("success") is False:
            errors = "; ".join(str(e.get("message", e)) for e in data.get("errors") or [] if isinstance(e, dict))
            raise OracleError(f"Workers AI reported failure: {errors or 'unknown error'}")
        return data["result"]

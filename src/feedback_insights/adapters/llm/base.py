"""Shared HTTP transport for oracle adapters."""

import asyncio
from abc import abstractmethod
from typing import Any

import httpx

from feedback_insights.config import OracleConfig
from feedback_insights.core import Oracle, OracleError


class HTTPOracle(Oracle):
    """Oracle reached over HTTP, with retries and rate limiting."""

    def __init__(self, config: OracleConfig) -> None:
        self.max_retries = config.max_retries
        self.initial_retry_delay = config.initial_retry_delay
        self.request_delay = config.request_delay
        self.timeout = config.timeout
        self._last_request_time = 0.0

    @abstractmethod
    def _build_request(self, prompt: str, system: str) -> tuple[str, dict, dict]:
        """Return (url, headers, json payload) for one call."""
        pass

    def _unwrap_envelope(self, data: Any) -> Any:
        """Strip transport-level wrapping; the body is otherwise returned as-is."""
        return data

    async def run(self, prompt: str, system: str = "") -> Any:
        url, headers, payload = self._build_request(prompt, system)
        data = await self._post(url, headers, payload)
        return self._unwrap_envelope(data)

    async def _post(self, url: str, headers: dict, payload: dict) -> Any:
        """POST with retry logic and rate limiting."""
        # Rate limiting: ensure minimum delay between requests
        current_time = asyncio.get_event_loop().time()
        time_since_last_request = current_time - self._last_request_time
        if time_since_last_request < self.request_delay:
            await asyncio.sleep(self.request_delay - time_since_last_request)

        last_exception: Exception | None = None

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, headers=headers, json=payload)

                    self._last_request_time = asyncio.get_event_loop().time()

                    if response.status_code == 200:
                        try:
                            return response.json()
                        except ValueError:
                            return response.text

                    # Rate limit - retry with backoff
                    if response.status_code == 429:
                        retry_after = self._get_retry_delay(response, attempt)
                        print(f"⏳ Rate limit hit, retrying after {retry_after:.1f}s (attempt {attempt + 1}/{self.max_retries})")
                        await asyncio.sleep(retry_after)
                        continue

                    # Server errors - retry with backoff
                    if response.status_code >= 500:
                        retry_delay = self.initial_retry_delay * (2 ** attempt)
                        print(f"⚠️  Server error {response.status_code}, retrying after {retry_delay:.1f}s")
                        await asyncio.sleep(retry_delay)
                        continue

                    # Other errors are not retried
                    raise OracleError(
                        f"Oracle request rejected with HTTP {response.status_code}: {response.text[:200]}"
                    )

            except httpx.RequestError as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    retry_delay = self.initial_retry_delay * (2 ** attempt)
                    print(f"⚠️  Network error, retrying after {retry_delay:.1f}s")
                    await asyncio.sleep(retry_delay)
                    continue

        if last_exception:
            raise OracleError(f"Oracle unreachable: {type(last_exception).__name__}: {last_exception}") from last_exception
        raise OracleError(f"Oracle call failed after {self.max_retries} attempts")

    def _get_retry_delay(self, response: httpx.Response, attempt: int) -> float:
        """Calculate retry delay from response headers or use exponential backoff."""
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        return self.initial_retry_delay * (2 ** attempt)

"""Tests for Claude oracle."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from feedback_insights.adapters.llm import ClaudeOracle
from feedback_insights.config import Settings
from feedback_insights.core import OracleError
from feedback_insights.pipeline import unwrap_response


@pytest.fixture
def mock_settings() -> Settings:
    """Create mock settings."""
    settings = Settings(anthropic_api_key="test-key")
    settings.oracle.max_retries = 3
    settings.oracle.initial_retry_delay = 0.01  # Faster for tests
    settings.oracle.request_delay = 0.05
    return settings


def _response(status_code: int, body=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.headers = {}
    response.text = "error body"
    response.json.return_value = body
    return response


@pytest.mark.asyncio
async def test_run_success(mock_settings: Settings) -> None:
    """Test successful call returns the full envelope."""
    oracle = ClaudeOracle(mock_settings)
    envelope = {
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": '{"sentiment": "positive", "urgency": "low"}'}],
    }

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.post.return_value = _response(200, envelope)
        mock_client_class.return_value = mock_client

        result = await oracle.run("Classify this", system="You classify feedback")

        assert result == envelope
        assert unwrap_response(result) == '{"sentiment": "positive", "urgency": "low"}'

        call_args = mock_client.post.call_args
        assert call_args.args[0] == "https://api.anthropic.com/v1/messages"
        assert call_args.kwargs["headers"]["x-api-key"] == "test-key"
        payload = call_args.kwargs["json"]
        assert payload["system"] == "You classify feedback"
        assert payload["messages"] == [{"role": "user", "content": "Classify this"}]
        assert payload["model"] == mock_settings.claude.model


@pytest.mark.asyncio
async def test_run_retry_on_429(mock_settings: Settings) -> None:
    """Test retry logic on 429 error."""
    oracle = ClaudeOracle(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.post.side_effect = [
            _response(429),
            _response(200, {"content": [{"type": "text", "text": "After retry"}]}),
        ]
        mock_client_class.return_value = mock_client

        result = await oracle.run("test")

        assert unwrap_response(result) == "After retry"
        assert mock_client.post.call_count == 2


@pytest.mark.asyncio
async def test_run_retry_on_server_error(mock_settings: Settings) -> None:
    """Test retry logic on 5xx errors."""
    oracle = ClaudeOracle(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.post.side_effect = [
            _response(503),
            _response(200, {"content": [{"type": "text", "text": "ok"}]}),
        ]
        mock_client_class.return_value = mock_client

        result = await oracle.run("test")

        assert unwrap_response(result) == "ok"
        assert mock_client.post.call_count == 2


@pytest.mark.asyncio
async def test_run_client_error_not_retried(mock_settings: Settings) -> None:
    """Test that 4xx errors other than 429 fail immediately."""
    oracle = ClaudeOracle(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.post.return_value = _response(401)
        mock_client_class.return_value = mock_client

        with pytest.raises(OracleError, match="HTTP 401"):
            await oracle.run("test")

        assert mock_client.post.call_count == 1


@pytest.mark.asyncio
async def test_run_network_error_exhausts_retries(mock_settings: Settings) -> None:
    """Test that persistent network errors surface as OracleError."""
    oracle = ClaudeOracle(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.post.side_effect = httpx.ConnectError("connection refused")
        mock_client_class.return_value = mock_client

        with pytest.raises(OracleError, match="unreachable"):
            await oracle.run("test")

        assert mock_client.post.call_count == 3


@pytest.mark.asyncio
async def test_run_non_json_body(mock_settings: Settings) -> None:
    """Test that a non-JSON body is returned as text."""
    oracle = ClaudeOracle(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        response = _response(200)
        response.json.side_effect = ValueError("not json")
        response.text = "plain answer"

        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.post.return_value = response
        mock_client_class.return_value = mock_client

        assert await oracle.run("test") == "plain answer"


@pytest.mark.asyncio
async def test_rate_limiting(mock_settings: Settings) -> None:
    """Test that requests are rate limited."""
    oracle = ClaudeOracle(mock_settings)

    with patch("httpx.AsyncClient") as mock_client_class:
        mock_client = AsyncMock()
        mock_client.__aenter__.return_value = mock_client
        mock_client.post.return_value = _response(200, {"content": [{"type": "text", "text": "test response"}]})
        mock_client_class.return_value = mock_client

        import time
        start = time.time()

        # Make two quick requests
        await oracle.run("test")
        await oracle.run("test")

        elapsed = time.time() - start

        # Should take at least request_delay seconds due to rate limiting
        assert elapsed >= mock_settings.oracle.request_delay

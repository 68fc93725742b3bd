"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest

from feedback_insights.config import ClassifierConfig, get_settings
from feedback_insights.core import ConfigError


def test_defaults_without_config_file(tmp_path: Path) -> None:
    """Test that a missing config file gives defaults."""
    with patch.dict("os.environ", {}, clear=True):
        settings = get_settings(tmp_path / "missing.yaml")

    assert settings.anthropic_api_key == ""
    assert settings.oracle.provider == "claude"
    assert settings.batch_size == 10
    assert settings.summary.max_themes == 3
    assert settings.summary.max_recommendations == 2
    assert settings.classifier == ClassifierConfig()
    assert "{content}" in settings.prompts.classification["user"]
    assert "{entries_json}" in settings.prompts.summary["user"]


def test_api_keys_from_environment(tmp_path: Path) -> None:
    """Test that secrets come from the environment."""
    env = {
        "ANTHROPIC_API_KEY": "test-key",
        "CLOUDFLARE_API_TOKEN": "cf-token",
        "CLOUDFLARE_ACCOUNT_ID": "acc123",
    }
    with patch.dict("os.environ", env, clear=True):
        settings = get_settings(tmp_path / "missing.yaml")

    assert settings.anthropic_api_key == "test-key"
    assert settings.cloudflare_api_token == "cf-token"
    assert settings.cloudflare_account_id == "acc123"


def test_yaml_overrides(tmp_path: Path) -> None:
    """Test that YAML sections override defaults."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
oracle:
  provider: workers_ai
  max_retries: 2
workers_ai:
  model: "@cf/meta/llama-3.1-8b-instruct"
classifier:
  positive_keywords: [super]
summary:
  max_themes: 5
storage:
  path: other/feedback.yaml
  batch_size: 25
paths:
  output_dir: reports
prompts:
  summary:
    system: Custom system prompt
""",
        encoding="utf-8",
    )

    settings = get_settings(config_path)

    assert settings.oracle.provider == "workers_ai"
    assert settings.oracle.max_retries == 2
    assert settings.oracle.request_delay == 1.5
    assert settings.workers_ai.model == "@cf/meta/llama-3.1-8b-instruct"
    assert settings.classifier.positive_keywords == ["super"]
    assert settings.classifier.negative_keywords == ["bad", "hate", "terrible"]
    assert settings.summary.max_themes == 5
    assert settings.storage_path == Path("other/feedback.yaml")
    assert settings.batch_size == 25
    assert settings.output_dir == Path("reports")
    assert settings.prompts.summary["system"] == "Custom system prompt"
    assert "{entries_json}" in settings.prompts.summary["user"]
    assert "{content}" in settings.prompts.classification["user"]


def test_empty_config_file(tmp_path: Path) -> None:
    """Test that an empty file is treated as no overrides."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    settings = get_settings(config_path)

    assert settings.batch_size == 10


def test_sections_without_keys_keep_defaults(tmp_path: Path) -> None:
    """Test that sections written with no keys load as defaults."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("oracle:\nstorage:\nprompts:\n  summary:\n", encoding="utf-8")

    settings = get_settings(config_path)

    assert settings.oracle.provider == "claude"
    assert settings.batch_size == 10
    assert "{entries_json}" in settings.prompts.summary["user"]


@pytest.mark.parametrize("content,message", [
    ("oracle: [unclosed", "Could not read config"),
    ("- just\n- a list\n", "mapping of sections"),
    ("oracle: claude\n", "section 'oracle' must be a mapping"),
])
def test_malformed_config_raises_config_error(tmp_path: Path, content: str, message: str) -> None:
    """Test that bad config files surface as ConfigError."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        get_settings(config_path)

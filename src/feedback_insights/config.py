"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from feedback_insights.core.errors import ConfigError


CLASSIFICATION_SYSTEM_PROMPT = (
    "You classify customer feedback. Respond with a single JSON object and nothing else."
)

CLASSIFICATION_USER_PROMPT = """Classify the following customer feedback.

Return strictly one JSON object with exactly these two fields:
{{"sentiment": "positive" | "negative" | "neutral", "urgency": "high" | "medium" | "low"}}

Feedback:
{content}"""

SUMMARY_SYSTEM_PROMPT = (
    "You are a customer experience analyst writing a short daily briefing for a product team."
)

SUMMARY_USER_PROMPT = """Below is customer feedback collected from multiple channels ({count} items).
Synthesize it into insights; do not repeat individual feedback verbatim.

{entries_json}

Respond using EXACTLY this format and nothing else:

**Summary**
One sentence headline describing the overall state of customer feedback.

**Key Themes**
• Theme
• Theme
• Theme

**Critical Issues**
• Issue
• Issue
• Issue

**Recommendation**
• Action
• Action

Rules:
- At most 3 themes, 3 critical issues and 2 recommendations.
- Keep the whole summary under 150 words.
- Do not repeat the same point in more than one section."""


@dataclass
class OracleConfig:
    """Text-inference service settings."""
    provider: str = "claude"
    max_retries: int = 5
    initial_retry_delay: float = 2.0
    request_delay: float = 1.5
    timeout: float = 60.0


@dataclass
class ClaudeConfig:
    """Claude API settings."""
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 1024
    temperature: float = 0.2


@dataclass
class WorkersAIConfig:
    """Cloudflare Workers AI settings."""
    model: str = "@cf/openai/gpt-oss-120b"


@dataclass
class ClassifierConfig:
    """Keyword lists for fallback classification."""
    positive_keywords: list[str] = field(default_factory=lambda: ["great", "love", "excellent"])
    negative_keywords: list[str] = field(default_factory=lambda: ["bad", "hate", "terrible"])
    high_urgency_keywords: list[str] = field(default_factory=lambda: ["urgent", "asap", "critical"])
    medium_urgency_keywords: list[str] = field(default_factory=lambda: ["soon", "important"])


@dataclass
class SummaryConfig:
    """Summary section limits."""
    max_themes: int = 3
    max_critical_issues: int = 3
    max_recommendations: int = 2
    headline_placeholder: str = "No headline available"


@dataclass
class StorageConfig:
    """Feedback storage settings."""
    path: Path = Path("data/feedback.yaml")
    batch_size: int = 10


@dataclass
class PathsConfig:
    """Path settings."""
    output_dir: Path = Path("summaries")


@dataclass
class PromptsConfig:
    """Prompts for the oracle."""
    classification: dict = field(default_factory=lambda: {
        "system": CLASSIFICATION_SYSTEM_PROMPT,
        "user": CLASSIFICATION_USER_PROMPT,
    })
    summary: dict = field(default_factory=lambda: {
        "system": SUMMARY_SYSTEM_PROMPT,
        "user": SUMMARY_USER_PROMPT,
    })


@dataclass
class Settings:
    """Application settings."""

    # API keys (from environment only)
    anthropic_api_key: str = ""
    cloudflare_api_token: str = ""
    cloudflare_account_id: Optional[str] = None

    # Config sections
    oracle: OracleConfig = field(default_factory=OracleConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    workers_ai: WorkersAIConfig = field(default_factory=WorkersAIConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    prompts: PromptsConfig = field(default_factory=PromptsConfig)

    @property
    def storage_path(self) -> Path:
        return self.storage.path

    @property
    def batch_size(self) -> int:
        return self.storage.batch_size

    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config {config_path} must be a mapping of sections")
    return config


def _section(config: dict, name: str) -> dict:
    # An empty section (``oracle:`` with no keys) loads as None
    values = config.get(name) or {}
    if not isinstance(values, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return values


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
        cloudflare_api_token=os.getenv("CLOUDFLARE_API_TOKEN", ""),
        cloudflare_account_id=os.getenv("CLOUDFLARE_ACCOUNT_ID"),
    )

    for section in ("oracle", "claude", "workers_ai", "classifier", "summary"):
        target = getattr(settings, section)
        for key, value in _section(config, section).items():
            setattr(target, key, value)

    for key, value in _section(config, "storage").items():
        setattr(settings.storage, key, Path(value) if key == "path" else value)

    for key, value in _section(config, "paths").items():
        setattr(settings.paths, key, Path(value))

    prompts = _section(config, "prompts")
    if prompts:
        # Partial overrides keep the default for whichever prompt is missing
        defaults = PromptsConfig()
        settings.prompts = PromptsConfig(
            classification={**defaults.classification, **_section(prompts, "classification")},
            summary={**defaults.summary, **_section(prompts, "summary")},
        )

    return settings

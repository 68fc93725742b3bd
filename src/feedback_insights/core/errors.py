"""Errors surfaced to callers."""


class FeedbackInsightsError(Exception):
    """Base error carrying a human-readable message."""


class InvalidInput(FeedbackInsightsError, ValueError):
    """Input text is empty or otherwise unusable."""


class EmptyBatch(FeedbackInsightsError, ValueError):
    """Nothing to summarize."""


class OracleError(FeedbackInsightsError):
    """The text-inference call itself failed (not a bad response)."""


class StorageError(FeedbackInsightsError):
    """Feedback storage is unavailable or rejected an operation."""


class ConfigError(FeedbackInsightsError):
    """Configuration file cannot be read or has the wrong shape."""

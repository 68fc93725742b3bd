"""Customer feedback classification and daily summaries."""

__version__ = "0.1.0"

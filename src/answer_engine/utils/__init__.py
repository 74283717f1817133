"""
Utilities module for the Answer Engine.

Provides logging setup, in-memory metrics and text normalization helpers.
"""

from answer_engine.utils.logging import setup_logging, get_logger, reset_logging
from answer_engine.utils.metrics import (
    Metrics,
    TimingStats,
    ProviderStats,
    increment_provider_calls,
    increment_provider_failures,
    time_provider_call,
    time_aggregate,
)
from answer_engine.utils.text import (
    strip_markup,
    truncate,
    clean_text,
    extract_domain,
    initial_glyph,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "reset_logging",
    # Metrics
    "Metrics",
    "TimingStats",
    "ProviderStats",
    "increment_provider_calls",
    "increment_provider_failures",
    "time_provider_call",
    "time_aggregate",
    # Text
    "strip_markup",
    "truncate",
    "clean_text",
    "extract_domain",
    "initial_glyph",
]

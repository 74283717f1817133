"""
Configuration module for the Answer Engine.

Provides Pydantic-based settings management with YAML file support
and environment variable overrides.
"""

from answer_engine.config.settings import (
    Settings,
    ProviderSettings,
    AggregatorSettings,
    SynthesisSettings,
    LoggingSettings,
)
from answer_engine.config.loader import (
    load_config,
    get_settings,
    reset_settings,
    get_default_config_path,
)

__all__ = [
    "Settings",
    "ProviderSettings",
    "AggregatorSettings",
    "SynthesisSettings",
    "LoggingSettings",
    "load_config",
    "get_settings",
    "reset_settings",
    "get_default_config_path",
]

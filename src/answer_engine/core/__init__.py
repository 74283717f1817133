"""
Core module for the Answer Engine.

Contains foundational types and exceptions used throughout the application.
"""

from answer_engine.core.exceptions import (
    AnswerEngineError,
    ConfigurationError,
    ProviderError,
    ProviderConnectionError,
    ProviderResponseError,
    ProviderPayloadError,
    QueryError,
    InvalidQueryError,
)
from answer_engine.core.models import (
    SourceFilter,
    NormalizedResult,
    IdentifiedResult,
    SummaryPayload,
    RelatedTopic,
    InstantAnswer,
    ProviderOutcome,
    AggregateResponse,
)

__all__ = [
    # Base
    "AnswerEngineError",
    "ConfigurationError",
    # Provider
    "ProviderError",
    "ProviderConnectionError",
    "ProviderResponseError",
    "ProviderPayloadError",
    # Query
    "QueryError",
    "InvalidQueryError",
    # Models
    "SourceFilter",
    "NormalizedResult",
    "IdentifiedResult",
    "SummaryPayload",
    "RelatedTopic",
    "InstantAnswer",
    "ProviderOutcome",
    "AggregateResponse",
]

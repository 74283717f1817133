"""
Answer Engine - multi-source answer aggregation.

Queries several public content APIs concurrently, normalizes and merges
their results, and builds a citation-annotated answer with related
follow-up questions.
"""

from answer_engine.config import Settings, load_config
from answer_engine.utils.logging import setup_logging, get_logger
from answer_engine.core.exceptions import AnswerEngineError, InvalidQueryError
from answer_engine.core.models import AggregateResponse, SourceFilter
from answer_engine.aggregator import Aggregator, aggregate

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "load_config",
    "setup_logging",
    "get_logger",
    "AnswerEngineError",
    "InvalidQueryError",
    "AggregateResponse",
    "SourceFilter",
    "Aggregator",
    "aggregate",
]

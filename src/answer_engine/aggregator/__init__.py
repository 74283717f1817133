"""
Aggregator module for the Answer Engine.

Provides the concurrent provider fan-out and the fixed-order merge
pipeline (merge, deduplicate, truncate, number).
"""

from answer_engine.aggregator.aggregator import (
    Aggregator,
    aggregate,
    enabled_roles,
    validate_query,
    ALWAYS_ON_ROLES,
    CONDITIONAL_ROLES,
)
from answer_engine.aggregator.pipeline import (
    MergeStage,
    default_stages,
    merge_outcomes,
    deduplicate,
    truncate_results,
    assign_ids,
    build_sources,
)

__all__ = [
    "Aggregator",
    "aggregate",
    "enabled_roles",
    "validate_query",
    "ALWAYS_ON_ROLES",
    "CONDITIONAL_ROLES",
    "MergeStage",
    "default_stages",
    "merge_outcomes",
    "deduplicate",
    "truncate_results",
    "assign_ids",
    "build_sources",
]

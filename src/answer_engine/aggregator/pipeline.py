"""
Fixed-order merge pipeline for provider outcomes.

The merged source list is built from named stages, one per provider role,
in a fixed order that never depends on which call completed first. The
merged list is then deduplicated by URL, truncated and numbered.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from answer_engine.core.models import IdentifiedResult, NormalizedResult, ProviderOutcome


@dataclass(frozen=True)
class MergeStage:
    """
    One step of the merge: contributes results of a single provider role.

    Attributes:
        role: Provider role whose outcome this stage reads
        limit: Maximum results taken from that outcome (None = all)
    """

    role: str
    limit: int | None = None

    def contribute(self, outcomes: Mapping[str, ProviderOutcome]) -> list[NormalizedResult]:
        """Results this stage adds; a skipped or missing provider adds none."""
        outcome = outcomes.get(self.role)
        if outcome is None:
            return []
        results = list(outcome.results)
        return results if self.limit is None else results[:self.limit]


def default_stages(search_results_in_merge: int = 2) -> tuple[MergeStage, ...]:
    """
    Merge order: encyclopedia summary, instant-answer abstract, the first
    encyclopedia search hits, then news, discussion and Q&A results.
    """
    return (
        MergeStage("summary"),
        MergeStage("instant_answer"),
        MergeStage("search", limit=search_results_in_merge),
        MergeStage("news"),
        MergeStage("discussion"),
        MergeStage("qa"),
    )


def merge_outcomes(
    outcomes: Mapping[str, ProviderOutcome],
    stages: Iterable[MergeStage],
) -> list[NormalizedResult]:
    """Concatenate stage contributions in stage order."""
    merged: list[NormalizedResult] = []
    for stage in stages:
        merged.extend(stage.contribute(outcomes))
    return merged


def deduplicate(results: Iterable[NormalizedResult]) -> list[NormalizedResult]:
    """Keep the first result for each distinct URL, preserving order."""
    seen_urls: set[str] = set()
    unique: list[NormalizedResult] = []
    for result in results:
        if result.url in seen_urls:
            continue
        seen_urls.add(result.url)
        unique.append(result)
    return unique


def truncate_results(results: Sequence[NormalizedResult], limit: int) -> list[NormalizedResult]:
    return list(results[:limit])


def assign_ids(results: Iterable[NormalizedResult]) -> tuple[IdentifiedResult, ...]:
    """Number results 1, 2, 3, ... in list order."""
    return tuple(
        IdentifiedResult.from_result(result, index)
        for index, result in enumerate(results, 1)
    )


def build_sources(
    outcomes: Mapping[str, ProviderOutcome],
    stages: Iterable[MergeStage],
    max_sources: int,
) -> tuple[IdentifiedResult, ...]:
    """Run the full pipeline: merge, deduplicate, truncate, number."""
    merged = merge_outcomes(outcomes, stages)
    return assign_ids(truncate_results(deduplicate(merged), max_sources))

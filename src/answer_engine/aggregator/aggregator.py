"""
Multi-source aggregation.

Fans a query out to the source adapters concurrently, waits for every call
to settle, merges the results in a fixed order, and assembles the answer
and related questions into one AggregateResponse.
"""

import asyncio
from typing import Sequence

import httpx

from answer_engine.aggregator.pipeline import (
    MergeStage,
    assign_ids,
    build_sources,
    default_stages,
)
from answer_engine.answer_generator import AnswerSynthesizer, RelatedQuestionGenerator
from answer_engine.config import AggregatorSettings, Settings
from answer_engine.core.exceptions import InvalidQueryError
from answer_engine.core.models import (
    AggregateResponse,
    IdentifiedResult,
    InstantAnswer,
    ProviderOutcome,
    SourceFilter,
    SummaryPayload,
)
from answer_engine.providers import ProviderSet, SourceProvider, create_http_client
from answer_engine.utils.logging import get_logger
from answer_engine.utils.metrics import increment_provider_failures, time_aggregate

logger = get_logger(__name__)

# Roles queried for every request
ALWAYS_ON_ROLES = ("summary", "search", "instant_answer")

# Roles queried only for `All` or their own category
CONDITIONAL_ROLES: dict[str, SourceFilter] = {
    "news": SourceFilter.NEWS,
    "discussion": SourceFilter.WEB,
    "qa": SourceFilter.ACADEMIC,
}


def enabled_roles(source_filter: SourceFilter) -> list[str]:
    """Provider roles that run for a source filter, in fan-out order."""
    roles = list(ALWAYS_ON_ROLES)
    for role, category in CONDITIONAL_ROLES.items():
        if source_filter in (SourceFilter.ALL, category):
            roles.append(role)
    return roles


def validate_query(query: str | None) -> str:
    """
    Return the trimmed query.

    Raises:
        InvalidQueryError: If the query is missing or blank
    """
    if query is None or not str(query).strip():
        raise InvalidQueryError("Query must be a non-empty string", query=query)
    return str(query).strip()


class Aggregator:
    """
    Orchestrates one aggregate request across all source adapters.

    All enabled adapter calls run concurrently and the aggregator proceeds
    only once every call has settled. Output order is fixed by the merge
    stages and never depends on completion order.

    Example:
        >>> async with Aggregator.from_settings(settings) as aggregator:
        ...     response = await aggregator.aggregate("Mars", SourceFilter.NEWS)
        ...     print(response.answer)
        ...     for source in response.sources:
        ...         print(source.id, source.title)
    """

    def __init__(
        self,
        providers: ProviderSet,
        settings: AggregatorSettings | None = None,
        synthesizer: AnswerSynthesizer | None = None,
        question_generator: RelatedQuestionGenerator | None = None,
        stages: Sequence[MergeStage] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the aggregator.

        Args:
            providers: Adapters by role
            settings: Merge and truncation limits
            synthesizer: Answer builder
            question_generator: Related-question builder
            stages: Merge stages; defaults to the standard order
            client: HTTP client owned by this aggregator, closed by aclose()
        """
        self.providers = providers
        self.settings = settings or AggregatorSettings()
        self.synthesizer = synthesizer or AnswerSynthesizer()
        self.question_generator = question_generator or RelatedQuestionGenerator()
        self.stages = tuple(stages or default_stages(self.settings.search_results_in_merge))
        self._client = client

        logger.debug(
            f"Aggregator initialized (max_sources={self.settings.max_sources}, "
            f"stages={[stage.role for stage in self.stages]})"
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> "Aggregator":
        """
        Create an Aggregator with the default HTTP adapters.

        Args:
            settings: Application settings
            client: Optional shared client; when omitted one is created and
                owned (closed) by the aggregator

        Returns:
            Configured Aggregator instance
        """
        owned_client = None
        if client is None:
            client = owned_client = create_http_client(settings.providers)

        return cls(
            providers=ProviderSet.create(client, settings.providers),
            settings=settings.aggregator,
            synthesizer=AnswerSynthesizer.from_settings(settings),
            question_generator=RelatedQuestionGenerator.from_settings(settings),
            client=owned_client,
        )

    async def __aenter__(self) -> "Aggregator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this aggregator owns one."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def aggregate(
        self,
        query: str,
        source_filter: SourceFilter | str = SourceFilter.ALL,
    ) -> AggregateResponse:
        """
        Answer a query from all enabled providers.

        Args:
            query: Non-empty free-text query
            source_filter: Category gating the news, discussion and Q&A adapters

        Returns:
            AggregateResponse; well-formed even when every provider is empty

        Raises:
            InvalidQueryError: If the query is blank or the filter unknown
        """
        query = validate_query(query)
        source_filter = SourceFilter.parse(source_filter)

        with time_aggregate():
            outcomes = await self._fan_out(query, source_filter)

            sources = build_sources(outcomes, self.stages, self.settings.max_sources)
            summary = _payload_of(outcomes.get("summary"), SummaryPayload)
            instant_answer = _payload_of(outcomes.get("instant_answer"), InstantAnswer)

            answer = self.synthesizer.synthesize(query, instant_answer, summary, sources)
            related = self.question_generator.generate(query, instant_answer)

        logger.info(
            f"Aggregated {query!r} (filter={source_filter.value}): "
            f"{len(sources)} sources from {len(outcomes)} providers"
        )

        return AggregateResponse(
            query=query,
            answer=answer,
            sources=sources,
            related_questions=tuple(related),
            summary=summary,
        )

    async def search_images(
        self,
        query: str,
        limit: int | None = None,
    ) -> tuple[IdentifiedResult, ...]:
        """
        Search media files for a query.

        Args:
            query: Non-empty free-text query
            limit: Maximum results (None keeps all the provider returned)

        Returns:
            Numbered image results; empty when the provider fails

        Raises:
            InvalidQueryError: If the query is blank
        """
        query = validate_query(query)

        if self.providers.images is None:
            logger.warning("No image provider configured")
            return ()

        outcome = await self.providers.images.fetch(query)
        results = outcome.results if limit is None else outcome.results[:limit]
        return assign_ids(results)

    async def _fan_out(
        self,
        query: str,
        source_filter: SourceFilter,
    ) -> dict[str, ProviderOutcome]:
        """Run every enabled adapter concurrently and wait for all of them."""
        roles = enabled_roles(source_filter)
        providers: list[SourceProvider] = [getattr(self.providers, role) for role in roles]

        settled = await asyncio.gather(
            *(provider.fetch(query) for provider in providers),
            return_exceptions=True,
        )

        outcomes: dict[str, ProviderOutcome] = {}
        for role, provider, result in zip(roles, providers, settled):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                name = getattr(provider, "name", role)
                logger.warning(f"Provider {name} raised {result!r}; using empty result")
                increment_provider_failures(name)
                result = ProviderOutcome.empty(name, error=repr(result))
            outcomes[role] = result

        return outcomes

    def __repr__(self) -> str:
        return (
            f"Aggregator(max_sources={self.settings.max_sources}, "
            f"stages={len(self.stages)})"
        )


def _payload_of(outcome: ProviderOutcome | None, payload_type: type):
    """Payload of an outcome when it has the expected type."""
    if outcome is None or not isinstance(outcome.payload, payload_type):
        return None
    return outcome.payload


async def aggregate(
    query: str,
    source_filter: SourceFilter | str = SourceFilter.ALL,
    settings: Settings | None = None,
) -> AggregateResponse:
    """
    One-shot helper: build an aggregator, answer one query, close it.

    Example:
        >>> response = asyncio.run(aggregate("Mars"))
    """
    async with Aggregator.from_settings(settings or Settings()) as aggregator:
        return await aggregator.aggregate(query, source_filter)

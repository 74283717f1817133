"""
Template-based answer synthesis.

Builds one Markdown answer from the raw provider payloads and the merged
source list. Sections are emitted in a fixed order and every emitted fact
gets the next citation marker, so numbering is contiguous from [1] no
matter which sections are missing. These markers count facts, not entries
of the merged source list.
"""

from dataclasses import dataclass, field
from typing import Callable, Sequence

from answer_engine.config import Settings, SynthesisSettings
from answer_engine.core.models import IdentifiedResult, InstantAnswer, SummaryPayload
from answer_engine.utils.logging import get_logger

logger = get_logger(__name__)

FALLBACK_INTRO = 'Here\'s what I found about "{query}":'
FALLBACK_BODY = (
    "Based on available sources, this topic covers various aspects that may "
    "include recent developments, historical context, and practical applications."
)

QUICK_ANSWER_LABEL = "**Quick Answer:**"
DEFINITION_LABEL = "**Definition:**"
KEY_INFORMATION_HEADING = "**Key Information:**"
RECENT_SOURCES_HEADING = "**From Recent Sources:**"
AVAILABLE_SOURCES_HEADING = "**Available Sources:**"
BULLET = "•"


class CitationCounter:
    """Hands out citation markers [1], [2], ... in emission order."""

    def __init__(self) -> None:
        self.count = 0

    def cite(self, text: str) -> str:
        """Append the next marker to text."""
        self.count += 1
        return f"{text}[{self.count}]"


@dataclass(frozen=True)
class SynthesisInput:
    """Everything one synthesis pass reads."""

    query: str
    instant_answer: InstantAnswer | None = None
    summary: SummaryPayload | None = None
    sources: Sequence[IdentifiedResult] = field(default_factory=tuple)


Section = Callable[[SynthesisInput, CitationCounter], list[str]]


class AnswerSynthesizer:
    """
    Deterministic answer builder.

    Section order:
        1. encyclopedia extract
        2. instant-answer abstract
        3. quick answer
        4. definition
        5. related topics
        6. snippets of the merged sources

    When no section emits anything, a generic paragraph listing the
    available sources is returned instead.

    Example:
        >>> synthesizer = AnswerSynthesizer()
        >>> synthesizer.synthesize("Mars", None, summary, sources)
        'Mars is the fourth planet...[1]\\n\\n**From Recent Sources:**...'
    """

    def __init__(self, config: SynthesisSettings | None = None) -> None:
        self.config = config or SynthesisSettings()
        self.sections: tuple[tuple[str, Section], ...] = (
            ("summary_extract", self._summary_extract),
            ("abstract", self._abstract),
            ("quick_answer", self._quick_answer),
            ("definition", self._definition),
            ("related_topics", self._related_topics),
            ("recent_sources", self._recent_sources),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnswerSynthesizer":
        return cls(config=settings.synthesis)

    def synthesize(
        self,
        query: str,
        instant_answer: InstantAnswer | None,
        summary: SummaryPayload | None,
        sources: Sequence[IdentifiedResult],
    ) -> str:
        """
        Build the answer text.

        Args:
            query: The user's query
            instant_answer: Instant-answer payload, if the provider returned one
            summary: Encyclopedia summary, if one was found
            sources: Merged, deduplicated source list

        Returns:
            Markdown answer with inline citation markers
        """
        context = SynthesisInput(
            query=query,
            instant_answer=instant_answer,
            summary=summary,
            sources=sources,
        )
        counter = CitationCounter()
        blocks: list[str] = []

        for name, section in self.sections:
            emitted = section(context, counter)
            if emitted:
                logger.debug(f"Section {name} emitted {len(emitted)} blocks")
            blocks.extend(emitted)

        if counter.count == 0:
            logger.debug(f"No content for {query!r}, using fallback answer")
            return self.fallback(query, sources)

        return "\n\n".join(blocks)

    def fallback(self, query: str, sources: Sequence[IdentifiedResult]) -> str:
        """Generic answer listing whatever sources exist, cited from [1]."""
        counter = CitationCounter()
        blocks = [FALLBACK_INTRO.format(query=query), FALLBACK_BODY]

        if sources:
            blocks.append(AVAILABLE_SOURCES_HEADING)
            blocks.extend(
                counter.cite(f"{BULLET} **{source.domain}**: {source.title}")
                for source in sources
            )

        return "\n\n".join(blocks)

    def _summary_extract(self, context: SynthesisInput, counter: CitationCounter) -> list[str]:
        if context.summary is None or not context.summary.extract:
            return []
        return [counter.cite(context.summary.extract)]

    def _abstract(self, context: SynthesisInput, counter: CitationCounter) -> list[str]:
        if context.instant_answer is None or not context.instant_answer.abstract:
            return []
        return [counter.cite(context.instant_answer.abstract)]

    def _quick_answer(self, context: SynthesisInput, counter: CitationCounter) -> list[str]:
        if context.instant_answer is None or not context.instant_answer.answer:
            return []
        return [counter.cite(f"{QUICK_ANSWER_LABEL} {context.instant_answer.answer}")]

    def _definition(self, context: SynthesisInput, counter: CitationCounter) -> list[str]:
        if context.instant_answer is None or not context.instant_answer.definition:
            return []
        return [counter.cite(f"{DEFINITION_LABEL} {context.instant_answer.definition}")]

    def _related_topics(self, context: SynthesisInput, counter: CitationCounter) -> list[str]:
        if context.instant_answer is None:
            return []

        topics = context.instant_answer.related_topics[:self.config.max_related_topics]
        bullets = [
            counter.cite(f"{BULLET} {topic.text}")
            for topic in topics
            if topic.text
        ]
        return [KEY_INFORMATION_HEADING, *bullets] if bullets else []

    def _recent_sources(self, context: SynthesisInput, counter: CitationCounter) -> list[str]:
        candidates = context.sources[:self.config.max_source_bullets]
        bullets = [
            counter.cite(f"{BULLET} **{source.title}**: {source.snippet}")
            for source in candidates
            if source.snippet
        ]
        return [RECENT_SOURCES_HEADING, *bullets] if bullets else []

    def __repr__(self) -> str:
        return f"AnswerSynthesizer(sections={[name for name, _ in self.sections]})"

"""
Instant-answer adapter backed by the DuckDuckGo Instant Answer API.

The outcome carries the parsed InstantAnswer payload (read by the answer
synthesizer and the related-question generator) and, when the payload
names an abstract URL, one NormalizedResult for that abstract source.
"""

from typing import Any

from answer_engine.core.models import (
    InstantAnswer,
    NormalizedResult,
    ProviderOutcome,
    RelatedTopic,
)
from answer_engine.providers.base import BaseProvider
from answer_engine.utils.text import extract_domain, initial_glyph, strip_markup


def _text(value: Any) -> str:
    """Plain text of a payload field; non-string values count as absent."""
    return strip_markup(value) if isinstance(value, str) else ""


def _url(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class DuckDuckGoProvider(BaseProvider):
    """Instant-answer lookup: abstract, quick answer, definition, related topics."""

    name = "instant_answer"

    async def _fetch(self, query: str) -> ProviderOutcome:
        data = self._expect_mapping(
            await self._get_json(
                self.settings.duckduckgo_url,
                params={
                    "q": query,
                    "format": "json",
                    "no_html": 1,
                    "skip_disambig": 1,
                },
            )
        )

        answer = self.parse_payload(data)
        if answer == InstantAnswer():
            return ProviderOutcome.empty(self.name)

        results: tuple[NormalizedResult, ...] = ()
        if answer.abstract_url:
            results = (
                NormalizedResult(
                    title=self._title(answer.heading or query),
                    snippet=answer.abstract[:self.settings.snippet_length],
                    url=answer.abstract_url,
                    domain=extract_domain(answer.abstract_url),
                    favicon=initial_glyph(answer.abstract_source, "D"),
                ),
            )

        return ProviderOutcome(provider=self.name, results=results, payload=answer)

    def parse_payload(self, data: dict[str, Any]) -> InstantAnswer:
        """Read the fields the answer generator uses; everything else is ignored."""
        topics = []
        for entry in self._expect_list(data.get("RelatedTopics"), "RelatedTopics"):
            if not isinstance(entry, dict):
                continue
            # Category groups nest their own "Topics" and carry no text
            topics.append(
                RelatedTopic(
                    text=_text(entry.get("Text")),
                    url=_url(entry.get("FirstURL")),
                )
            )

        return InstantAnswer(
            heading=_text(data.get("Heading")),
            abstract=_text(data.get("Abstract")) or _text(data.get("AbstractText")),
            abstract_url=_url(data.get("AbstractURL")),
            abstract_source=_text(data.get("AbstractSource")),
            answer=_text(data.get("Answer")),
            definition=_text(data.get("Definition")),
            related_topics=tuple(topics),
        )

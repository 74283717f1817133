"""
Source adapters for the Answer Engine.

One adapter per public content provider, all sharing the
`fetch(query) -> ProviderOutcome` interface:

- WikipediaSummaryProvider: encyclopedia page summary
- WikipediaSearchProvider: encyclopedia full-text search
- DuckDuckGoProvider: instant answers
- NewsProvider: news feed
- HackerNewsProvider: forum discussions
- StackExchangeProvider: Q&A excerpts
- WikimediaImageProvider: media files
"""

from dataclasses import dataclass

import httpx

from answer_engine.config.settings import ProviderSettings
from answer_engine.providers.base import BaseProvider, SourceProvider, create_http_client
from answer_engine.providers.duckduckgo import DuckDuckGoProvider
from answer_engine.providers.hackernews import HackerNewsProvider
from answer_engine.providers.news import NewsProvider
from answer_engine.providers.stackexchange import StackExchangeProvider
from answer_engine.providers.wikimedia import WikimediaImageProvider
from answer_engine.providers.wikipedia import (
    WikipediaProvider,
    WikipediaSearchProvider,
    WikipediaSummaryProvider,
)


@dataclass(frozen=True)
class ProviderSet:
    """The adapters one aggregator fans out to, by role."""

    summary: SourceProvider
    search: SourceProvider
    instant_answer: SourceProvider
    news: SourceProvider
    discussion: SourceProvider
    qa: SourceProvider
    images: SourceProvider | None = None

    @classmethod
    def create(
        cls,
        client: httpx.AsyncClient,
        settings: ProviderSettings | None = None,
    ) -> "ProviderSet":
        """Build the default HTTP adapters around one shared client."""
        settings = settings or ProviderSettings()
        return cls(
            summary=WikipediaSummaryProvider(client, settings),
            search=WikipediaSearchProvider(client, settings),
            instant_answer=DuckDuckGoProvider(client, settings),
            news=NewsProvider(client, settings),
            discussion=HackerNewsProvider(client, settings),
            qa=StackExchangeProvider(client, settings),
            images=WikimediaImageProvider(client, settings),
        )


__all__ = [
    "BaseProvider",
    "SourceProvider",
    "create_http_client",
    "ProviderSet",
    "WikipediaProvider",
    "WikipediaSearchProvider",
    "WikipediaSummaryProvider",
    "DuckDuckGoProvider",
    "NewsProvider",
    "HackerNewsProvider",
    "StackExchangeProvider",
    "WikimediaImageProvider",
]

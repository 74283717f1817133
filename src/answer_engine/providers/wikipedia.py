"""
Encyclopedia adapters backed by the Wikipedia APIs.

- WikipediaSearchProvider: full-text search, one result per hit.
- WikipediaSummaryProvider: resolves the best-matching article through
  search, then loads its REST page summary (two calls; no second call when
  the search has no hits).
"""

from typing import Any
from urllib.parse import quote

from answer_engine.core.models import NormalizedResult, ProviderOutcome, SummaryPayload
from answer_engine.providers.base import BaseProvider
from answer_engine.utils.text import strip_markup

WIKIPEDIA_DOMAIN = "wikipedia.org"
WIKIPEDIA_FAVICON = "W"

# Characters kept literal in article paths, as a browser would
_PATH_SAFE = "!'()*"


class WikipediaProvider(BaseProvider):
    """Shared search call and link building for the encyclopedia adapters."""

    name = "wikipedia"

    async def _search(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Run a full-text search and return the raw hit list."""
        data = self._expect_mapping(
            await self._get_json(
                self.settings.wikipedia_api_url,
                params={
                    "action": "query",
                    "list": "search",
                    "srsearch": query,
                    "srlimit": limit,
                    "format": "json",
                    "origin": "*",
                },
            )
        )
        search = (data.get("query") or {}).get("search")
        hits = self._expect_list(search, "query.search")
        return [hit for hit in hits if isinstance(hit, dict) and hit.get("title")]

    def article_url(self, title: str) -> str:
        """Canonical article link for a page title."""
        path = quote(title.replace(" ", "_"), safe=_PATH_SAFE)
        return f"{self.settings.wikipedia_page_url}/{path}"


class WikipediaSearchProvider(WikipediaProvider):
    """Encyclopedia full-text search adapter."""

    name = "wikipedia_search"

    async def _fetch(self, query: str) -> ProviderOutcome:
        hits = await self._search(query, self.settings.search_limit)

        results = tuple(
            NormalizedResult(
                title=self._title(hit["title"]),
                snippet=self._snippet(hit.get("snippet")),
                url=self.article_url(hit["title"]),
                domain=WIKIPEDIA_DOMAIN,
                favicon=WIKIPEDIA_FAVICON,
            )
            for hit in hits
        )
        return ProviderOutcome(provider=self.name, results=results)


class WikipediaSummaryProvider(WikipediaProvider):
    """
    Encyclopedia page-summary adapter.

    The outcome carries the SummaryPayload and one NormalizedResult built
    from it. A topic that cannot be found is an empty outcome, not an error.
    """

    name = "wikipedia_summary"

    async def _fetch(self, query: str) -> ProviderOutcome:
        hits = await self._search(query, limit=1)
        if not hits:
            return ProviderOutcome.empty(self.name)

        page_title = hits[0]["title"]
        data = self._expect_mapping(
            await self._get_json(
                f"{self.settings.wikipedia_rest_url}/page/summary/"
                f"{quote(page_title, safe='')}"
            )
        )

        summary = self._parse_summary(data, page_title)
        result = NormalizedResult(
            title=self._title(summary.title),
            snippet=summary.extract[:self.settings.snippet_length],
            url=summary.page_url,
            domain=WIKIPEDIA_DOMAIN,
            favicon=WIKIPEDIA_FAVICON,
        )
        return ProviderOutcome(provider=self.name, results=(result,), payload=summary)

    def _parse_summary(self, data: dict[str, Any], page_title: str) -> SummaryPayload:
        thumbnail = data.get("thumbnail") or {}
        desktop = (data.get("content_urls") or {}).get("desktop") or {}

        return SummaryPayload(
            title=strip_markup(data.get("title")) or page_title,
            extract=strip_markup(data.get("extract")),
            page_url=desktop.get("page") or self.article_url(page_title),
            thumbnail_url=thumbnail.get("source") if isinstance(thumbnail, dict) else None,
        )

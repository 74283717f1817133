"""
Discussion adapter backed by the Hacker News Algolia search index.
"""

from typing import Any

from answer_engine.core.models import NormalizedResult, ProviderOutcome
from answer_engine.providers.base import BaseProvider
from answer_engine.utils.text import extract_domain


class HackerNewsProvider(BaseProvider):
    """Discussion-forum lookup over stories."""

    name = "discussion"

    async def _fetch(self, query: str) -> ProviderOutcome:
        data = self._expect_mapping(
            await self._get_json(
                self.settings.hackernews_url,
                params={
                    "query": query,
                    "tags": "story",
                    "hitsPerPage": self.settings.discussion_limit,
                },
            )
        )

        results = tuple(
            self._to_result(hit)
            for hit in self._expect_list(data.get("hits"), "hits")
            if isinstance(hit, dict) and (hit.get("url") or hit.get("objectID"))
        )
        return ProviderOutcome(provider=self.name, results=results)

    def _to_result(self, hit: dict[str, Any]) -> NormalizedResult:
        url = hit.get("url") or f"{self.settings.hackernews_item_url}?id={hit['objectID']}"
        # Link-only stories have no text; fall back to their activity
        snippet = self._snippet(hit.get("story_text")) or (
            f"{hit.get('points') or 0} points • {hit.get('num_comments') or 0} comments"
        )

        return NormalizedResult(
            title=self._title(hit.get("title")),
            snippet=snippet,
            url=url,
            domain=extract_domain(url),
            favicon="HN",
        )

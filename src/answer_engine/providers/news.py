"""
News adapter: Google News search RSS read through the rss2json bridge.
"""

from urllib.parse import urlencode

from answer_engine.core.exceptions import ProviderPayloadError
from answer_engine.core.models import NormalizedResult, ProviderOutcome
from answer_engine.providers.base import BaseProvider
from answer_engine.utils.text import extract_domain, initial_glyph


class NewsProvider(BaseProvider):
    """News-feed lookup; keeps the first `news_limit` items of the feed."""

    name = "news"

    def feed_url(self, query: str) -> str:
        """Search feed URL handed to the bridge as its `rss_url` parameter."""
        params = urlencode({"q": query, "hl": "en-US", "gl": "US", "ceid": "US:en"})
        return f"{self.settings.news_feed_url}?{params}"

    async def _fetch(self, query: str) -> ProviderOutcome:
        data = self._expect_mapping(
            await self._get_json(
                self.settings.rss2json_url,
                params={"rss_url": self.feed_url(query)},
            )
        )

        if data.get("status") != "ok":
            raise ProviderPayloadError(
                data.get("message") or "Feed bridge reported a failure",
                provider=self.name,
                details={"status": data.get("status")},
            )

        results = []
        for item in self._expect_list(data.get("items"), "items")[:self.settings.news_limit]:
            if not isinstance(item, dict) or not item.get("link"):
                continue
            link = item["link"].strip()
            domain = extract_domain(link)
            results.append(
                NormalizedResult(
                    title=self._title(item.get("title")),
                    snippet=self._snippet(item.get("description")),
                    url=link,
                    domain=domain,
                    favicon=initial_glyph(domain, "N"),
                )
            )

        return ProviderOutcome(provider=self.name, results=tuple(results))

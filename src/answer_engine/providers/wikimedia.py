"""
Image adapter backed by the Wikimedia Commons file search.
"""

from urllib.parse import quote

from answer_engine.core.models import NormalizedResult, ProviderOutcome
from answer_engine.providers.base import BaseProvider

WIKIMEDIA_DOMAIN = "wikimedia.org"
FILE_PREFIX = "File:"
FILE_NAMESPACE = 6

# Characters left literal when a title is encoded as one path component
_COMPONENT_SAFE = "!'()*"


class WikimediaImageProvider(BaseProvider):
    """Media-file search in the File namespace."""

    name = "images"

    async def _fetch(self, query: str) -> ProviderOutcome:
        data = self._expect_mapping(
            await self._get_json(
                self.settings.commons_api_url,
                params={
                    "action": "query",
                    "list": "search",
                    "srsearch": query,
                    "srnamespace": FILE_NAMESPACE,
                    "srlimit": self.settings.image_limit,
                    "format": "json",
                    "origin": "*",
                },
            )
        )

        hits = self._expect_list((data.get("query") or {}).get("search"), "query.search")
        results = tuple(
            NormalizedResult(
                title=self._title(hit["title"].removeprefix(FILE_PREFIX)),
                snippet=self._snippet(hit.get("snippet")),
                url=f"{self.settings.commons_page_url}/{quote(hit['title'], safe=_COMPONENT_SAFE)}",
                domain=WIKIMEDIA_DOMAIN,
                favicon="WM",
            )
            for hit in hits
            if isinstance(hit, dict) and hit.get("title")
        )
        return ProviderOutcome(provider=self.name, results=results)

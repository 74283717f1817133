"""
Q&A adapter backed by the Stack Exchange excerpt search.
"""

from answer_engine.core.models import NormalizedResult, ProviderOutcome
from answer_engine.providers.base import BaseProvider
from answer_engine.utils.text import extract_domain


class StackExchangeProvider(BaseProvider):
    """Q&A-site lookup; every excerpt links to its question."""

    name = "qa"

    async def _fetch(self, query: str) -> ProviderOutcome:
        data = self._expect_mapping(
            await self._get_json(
                self.settings.stackexchange_url,
                params={
                    "order": "desc",
                    "sort": "relevance",
                    "q": query,
                    "site": self.settings.stackexchange_site,
                    "pagesize": self.settings.qa_limit,
                },
            )
        )

        results = []
        for item in self._expect_list(data.get("items"), "items"):
            if not isinstance(item, dict) or item.get("question_id") is None:
                continue
            url = f"{self.settings.stackexchange_question_url}/{item['question_id']}"
            results.append(
                NormalizedResult(
                    title=self._title(item.get("title")),
                    snippet=self._snippet(item.get("excerpt")),
                    url=url,
                    domain=extract_domain(url),
                    favicon="SO",
                )
            )

        return ProviderOutcome(provider=self.name, results=tuple(results))

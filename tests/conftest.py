"""
Shared pytest fixtures for Answer Engine tests.

Provides reusable fixtures for:
- Configuration and settings
- Mocked HTTP clients and in-memory providers
- Sample provider payloads
- Temporary resources
"""

import asyncio
import tempfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest

from answer_engine.config import Settings, reset_settings
from answer_engine.core.models import (
    InstantAnswer,
    NormalizedResult,
    ProviderOutcome,
    RelatedTopic,
    SummaryPayload,
)
from answer_engine.providers import ProviderSet
from answer_engine.utils.logging import reset_logging
from answer_engine.utils.metrics import Metrics


@pytest.fixture(autouse=True)
def reset_global_state():
    """
    Reset metrics, logging and cached settings before and after each test.

    This ensures tests are isolated and don't share global state.
    """
    Metrics.reset()
    reset_settings()
    yield
    Metrics.reset()
    reset_settings()
    reset_logging()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with a short provider timeout."""
    return Settings(
        providers={"timeout_seconds": 2.0},
        logging={"level": "DEBUG"},
    )


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """HTTP client whose requests are answered by `handler`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def result(url: str, title: str = "Title", snippet: str = "Snippet") -> NormalizedResult:
    """Build a NormalizedResult for a URL."""
    return NormalizedResult(
        title=title,
        snippet=snippet,
        url=url,
        domain=httpx.URL(url).host.removeprefix("www."),
        favicon="T",
    )


class FakeProvider:
    """
    In-memory provider returning a fixed outcome.

    Counts calls and can wait before answering or raise instead.
    """

    def __init__(
        self,
        name: str,
        results: tuple[NormalizedResult, ...] = (),
        payload: SummaryPayload | InstantAnswer | None = None,
        delay: float = 0.0,
        raises: Exception | None = None,
    ) -> None:
        self.name = name
        self.results = tuple(results)
        self.payload = payload
        self.delay = delay
        self.raises = raises
        self.calls: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def fetch(self, query: str) -> ProviderOutcome:
        self.calls.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raises is not None:
            raise self.raises
        return ProviderOutcome(provider=self.name, results=self.results, payload=self.payload)


def fake_provider_set(**overrides: FakeProvider) -> ProviderSet:
    """ProviderSet of empty fakes, with selected roles replaced."""
    providers = {
        role: FakeProvider(role)
        for role in ("summary", "search", "instant_answer", "news", "discussion", "qa", "images")
    }
    providers.update(overrides)
    return ProviderSet(**providers)


@pytest.fixture
def mars_summary() -> SummaryPayload:
    """Encyclopedia summary for Mars."""
    return SummaryPayload(
        title="Mars",
        extract="Mars is the fourth planet...",
        page_url="https://en.wikipedia.org/wiki/Mars",
    )


@pytest.fixture
def sample_instant_answer() -> InstantAnswer:
    """Instant-answer payload with every field the generator reads."""
    return InstantAnswer(
        heading="Python (programming language)",
        abstract="Python is a high-level programming language.",
        abstract_url="https://en.wikipedia.org/wiki/Python_(programming_language)",
        abstract_source="Wikipedia",
        answer="A programming language",
        definition="Python: an interpreted language.",
        related_topics=(
            RelatedTopic("CPython - The reference implementation", "https://duckduckgo.com/CPython"),
            RelatedTopic("PyPy - A fast implementation", "https://duckduckgo.com/PyPy"),
            RelatedTopic("", ""),
            RelatedTopic("Guido van Rossum - Creator of Python", "https://duckduckgo.com/Guido"),
            RelatedTopic("Jython - Python on the JVM", "https://duckduckgo.com/Jython"),
        ),
    )


@pytest.fixture
def wikipedia_search_payload() -> dict:
    """Encyclopedia search API response."""
    return {
        "query": {
            "search": [
                {
                    "title": "Mars",
                    "snippet": '<span class="searchmatch">Mars</span> is the fourth planet &amp; more',
                },
                {
                    "title": "Mars (mythology)",
                    "snippet": "Roman god of war",
                },
            ]
        }
    }


@pytest.fixture
def wikipedia_summary_payload() -> dict:
    """Encyclopedia REST page summary response."""
    return {
        "title": "Mars",
        "extract": "Mars is the fourth planet from the Sun.",
        "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Mars"}},
        "thumbnail": {"source": "https://upload.wikimedia.org/mars.jpg"},
    }


@pytest.fixture
def duckduckgo_payload() -> dict:
    """Instant-answer API response."""
    return {
        "Heading": "Mars",
        "Abstract": "Mars is the fourth planet from the Sun.",
        "AbstractURL": "https://en.wikipedia.org/wiki/Mars",
        "AbstractSource": "Wikipedia",
        "Answer": "",
        "Definition": "",
        "RelatedTopics": [
            {"Text": "Phobos - Moon of Mars", "FirstURL": "https://duckduckgo.com/Phobos"},
            {"Name": "Exploration", "Topics": [{"Text": "Rover", "FirstURL": "https://x"}]},
        ],
    }


@pytest.fixture
def news_payload() -> dict:
    """rss2json bridge response for a news feed."""
    return {
        "status": "ok",
        "items": [
            {
                "title": f"Mars story {i}",
                "link": f"https://www.news{i}.example.com/story",
                "description": f"<p>Story <b>{i}</b></p>",
            }
            for i in range(7)
        ],
    }


@pytest.fixture
def hackernews_payload() -> dict:
    """Discussion search response."""
    return {
        "hits": [
            {
                "objectID": "101",
                "title": "Show HN: Mars rover tracker",
                "url": "https://rover.example.org/",
                "story_text": None,
                "points": 42,
                "num_comments": 7,
            },
            {
                "objectID": "102",
                "title": "Ask HN: Living on Mars?",
                "url": None,
                "story_text": "<p>Would you go?</p>",
                "points": 3,
                "num_comments": 1,
            },
        ]
    }


@pytest.fixture
def stackexchange_payload() -> dict:
    """Q&A excerpt search response."""
    return {
        "items": [
            {
                "question_id": 12345,
                "title": "How do I parse JSON?",
                "excerpt": "Use the <span>json</span> module",
            },
            {"title": "No id"},
        ]
    }


@pytest.fixture
def commons_payload() -> dict:
    """Media file search response."""
    return {
        "query": {
            "search": [
                {"title": "File:Mars globe.jpg", "snippet": "Globe of Mars"},
                {"title": "File:Olympus Mons.png", "snippet": ""},
            ]
        }
    }

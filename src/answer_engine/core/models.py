"""
Data model shared by the source adapters, the aggregator and the
answer generator.

All models are frozen dataclasses: adapters create NormalizedResult,
SummaryPayload and InstantAnswer values, the aggregator turns results into
IdentifiedResult values and returns a single AggregateResponse.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum

from answer_engine.core.exceptions import InvalidQueryError


class SourceFilter(str, Enum):
    """Caller-supplied category restricting which conditional adapters run."""

    ALL = "All"
    WEB = "Web"
    ACADEMIC = "Academic"
    NEWS = "News"
    IMAGES = "Images"

    @classmethod
    def parse(cls, value: "SourceFilter | str") -> "SourceFilter":
        """
        Parse a filter name case-insensitively.

        Raises:
            InvalidQueryError: If the name is not a known category
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise InvalidQueryError(
            f"Unknown source filter: {value!r}",
            details={"allowed": [m.value for m in cls]},
        )


@dataclass(frozen=True)
class NormalizedResult:
    """A single provider hit in the common result shape."""

    title: str
    snippet: str
    url: str
    domain: str
    favicon: str


@dataclass(frozen=True)
class IdentifiedResult(NormalizedResult):
    """A merged result carrying its positional display id."""

    id: int = 0

    @classmethod
    def from_result(cls, result: NormalizedResult, result_id: int) -> "IdentifiedResult":
        return cls(
            title=result.title,
            snippet=result.snippet,
            url=result.url,
            domain=result.domain,
            favicon=result.favicon,
            id=result_id,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SummaryPayload:
    """Encyclopedia page summary for the best-matching article."""

    title: str
    extract: str
    page_url: str
    thumbnail_url: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RelatedTopic:
    """
    One entry of the instant-answer related topics list.

    Category groups have no text of their own and are kept with an empty
    text so positional slicing matches the provider's list.
    """

    text: str = ""
    url: str = ""


@dataclass(frozen=True)
class InstantAnswer:
    """Fields of the instant-answer payload read by the answer generator."""

    heading: str = ""
    abstract: str = ""
    abstract_url: str = ""
    abstract_source: str = ""
    answer: str = ""
    definition: str = ""
    related_topics: tuple[RelatedTopic, ...] = ()


@dataclass(frozen=True)
class ProviderOutcome:
    """
    Uniform return value of every source adapter.

    An outcome carrying an error is always empty: failures are reported
    for diagnostics only and never raised past the adapter.
    """

    provider: str
    results: tuple[NormalizedResult, ...] = ()
    payload: SummaryPayload | InstantAnswer | None = None
    error: str | None = None

    @classmethod
    def empty(cls, provider: str, error: str | None = None) -> "ProviderOutcome":
        return cls(provider=provider, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_empty(self) -> bool:
        return not self.results and self.payload is None


@dataclass(frozen=True)
class AggregateResponse:
    """
    The single value returned to callers of the aggregator.

    Citation markers in `answer` number facts in emission order and are not
    guaranteed to match `sources[n - 1].id`.
    """

    query: str
    answer: str
    sources: tuple[IdentifiedResult, ...] = field(default_factory=tuple)
    related_questions: tuple[str, ...] = field(default_factory=tuple)
    summary: SummaryPayload | None = None

    @property
    def has_sources(self) -> bool:
        return bool(self.sources)

    def to_dict(self) -> dict:
        """Render as a JSON-ready mapping."""
        return {
            "query": self.query,
            "answer": self.answer,
            "sources": [source.to_dict() for source in self.sources],
            "related_questions": list(self.related_questions),
            "summary": self.summary.to_dict() if self.summary else None,
        }

"""
Pydantic settings models for the Answer Engine.

All configuration is defined here with defaults matching the public,
key-less provider endpoints the engine queries.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ProviderSettings(BaseModel):
    """Source adapter configuration: transport, text bounds and endpoints."""

    timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        description="Per-request timeout for provider calls in seconds",
    )
    user_agent: str = Field(
        default="AnswerEngine/0.1",
        description="User agent sent with every provider request",
    )
    snippet_length: int = Field(
        default=150,
        ge=20,
        le=1000,
        description="Maximum length of a result snippet",
    )
    title_length: int = Field(
        default=200,
        ge=20,
        le=1000,
        description="Maximum length of a result title",
    )
    search_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Encyclopedia search hits requested per query",
    )
    news_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="News items kept per query",
    )
    discussion_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Discussion stories requested per query",
    )
    qa_limit: int = Field(
        default=3,
        ge=1,
        le=30,
        description="Q&A excerpts requested per query",
    )
    image_limit: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Image results requested per query",
    )
    wikipedia_api_url: str = Field(
        default="https://en.wikipedia.org/w/api.php",
        description="Encyclopedia action API endpoint",
    )
    wikipedia_rest_url: str = Field(
        default="https://en.wikipedia.org/api/rest_v1",
        description="Encyclopedia REST API base URL",
    )
    wikipedia_page_url: str = Field(
        default="https://en.wikipedia.org/wiki",
        description="Base URL for encyclopedia article links",
    )
    duckduckgo_url: str = Field(
        default="https://api.duckduckgo.com/",
        description="Instant answer API endpoint",
    )
    rss2json_url: str = Field(
        default="https://api.rss2json.com/v1/api.json",
        description="RSS-to-JSON bridge endpoint",
    )
    news_feed_url: str = Field(
        default="https://news.google.com/rss/search",
        description="News search RSS feed passed through the bridge",
    )
    hackernews_url: str = Field(
        default="https://hn.algolia.com/api/v1/search",
        description="Discussion forum search endpoint",
    )
    hackernews_item_url: str = Field(
        default="https://news.ycombinator.com/item",
        description="Discussion item link used when a story has no URL",
    )
    stackexchange_url: str = Field(
        default="https://api.stackexchange.com/2.3/search/excerpts",
        description="Q&A excerpt search endpoint",
    )
    stackexchange_site: str = Field(
        default="stackoverflow",
        description="Stack Exchange site to search",
    )
    stackexchange_question_url: str = Field(
        default="https://stackoverflow.com/q",
        description="Base URL for Q&A question links",
    )
    commons_api_url: str = Field(
        default="https://commons.wikimedia.org/w/api.php",
        description="Media repository action API endpoint",
    )
    commons_page_url: str = Field(
        default="https://commons.wikimedia.org/wiki",
        description="Base URL for media file pages",
    )


class AggregatorSettings(BaseModel):
    """Merge and truncation limits."""

    max_sources: int = Field(
        default=8,
        ge=1,
        le=50,
        description="Maximum sources kept after deduplication",
    )
    search_results_in_merge: int = Field(
        default=2,
        ge=0,
        le=20,
        description="Encyclopedia search results merged into the source list",
    )


class SynthesisSettings(BaseModel):
    """Answer synthesis and related-question limits."""

    max_related_topics: int = Field(
        default=4,
        ge=0,
        le=20,
        description="Related topics considered for the answer",
    )
    max_source_bullets: int = Field(
        default=3,
        ge=0,
        le=20,
        description="Merged sources considered for snippet bullets",
    )
    max_related_questions: int = Field(
        default=5,
        ge=1,
        le=8,
        description="Maximum related questions returned",
    )
    max_topic_questions: int = Field(
        default=3,
        ge=0,
        le=8,
        description="Related topics considered for topic questions",
    )
    topic_question_max_length: int = Field(
        default=100,
        ge=10,
        le=500,
        description="Topics with text this long or longer are not turned into questions",
    )


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseModel):
    """Where log records go and how they look. Console output is stderr."""

    level: LogLevel = Field(default="INFO", description="Threshold for the package logger")
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="logging.Formatter pattern",
    )
    date_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="strftime pattern for %(asctime)s")
    file_path: Path | None = Field(
        default=None,
        description="Rotating log file; unset disables file logging",
    )
    max_file_size_mb: int = Field(default=10, ge=1, le=100, description="Rotate after this many MB")
    backup_count: int = Field(default=3, ge=0, le=10, description="Rotated files kept")
    log_to_console: bool = Field(default=True, description="Also log to stderr")

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("file_path")
    @classmethod
    def expand_home(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None


class Settings(BaseModel):
    """
    Root configuration model containing all subsystem settings.

    Settings are loaded from YAML with environment variable overrides.
    """

    providers: ProviderSettings = Field(
        default_factory=ProviderSettings,
        description="Source adapter settings",
    )
    aggregator: AggregatorSettings = Field(
        default_factory=AggregatorSettings,
        description="Aggregator settings",
    )
    synthesis: SynthesisSettings = Field(
        default_factory=SynthesisSettings,
        description="Answer synthesis settings",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    model_config = {
        "extra": "forbid",
        "validate_default": True,
    }

"""
Common machinery for source adapters.

Every adapter exposes `fetch(query) -> ProviderOutcome` and never raises:
transport failures, HTTP errors and malformed payloads are logged, counted
and turned into an empty outcome at this boundary.
"""

from typing import Any, Protocol, runtime_checkable

import httpx

from answer_engine.config.settings import ProviderSettings
from answer_engine.core.exceptions import (
    ProviderConnectionError,
    ProviderError,
    ProviderPayloadError,
    ProviderResponseError,
)
from answer_engine.core.models import ProviderOutcome
from answer_engine.utils.logging import get_logger_with_context
from answer_engine.utils.metrics import increment_provider_failures, time_provider_call
from answer_engine.utils.text import clean_text


def create_http_client(settings: ProviderSettings | None = None) -> httpx.AsyncClient:
    """
    Build the HTTP client shared by all adapters of one aggregator.

    The timeout bounds every provider call; there are no retries.
    """
    settings = settings or ProviderSettings()
    return httpx.AsyncClient(
        timeout=settings.timeout_seconds,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        follow_redirects=True,
    )


@runtime_checkable
class SourceProvider(Protocol):
    """Capability interface shared by every source adapter."""

    name: str

    async def fetch(self, query: str) -> ProviderOutcome: ...


class BaseProvider:
    """
    Base class for HTTP-backed source adapters.

    Subclasses implement `_fetch`, which may raise freely; `fetch` wraps it
    with metrics, logging and failure isolation.

    Example:
        >>> async with httpx.AsyncClient() as client:
        ...     provider = HackerNewsProvider(client)
        ...     outcome = await provider.fetch("rust async")
        ...     print(len(outcome.results))
    """

    name: str = "provider"

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: ProviderSettings | None = None,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            client: Shared HTTP client (owned by the caller)
            settings: Provider settings; defaults when omitted
        """
        self.client = client
        self.settings = settings or ProviderSettings()
        self.logger = get_logger_with_context(__name__, provider=self.name)

    async def fetch(self, query: str) -> ProviderOutcome:
        """
        Query the provider.

        Args:
            query: Free-text query

        Returns:
            ProviderOutcome; empty (with `error` set) on any failure
        """
        if not query or not query.strip():
            return ProviderOutcome.empty(self.name, error="empty query")

        with time_provider_call(self.name):
            try:
                outcome = await self._fetch(query.strip())
            except ProviderError as e:
                self.logger.warning(f"Request failed: {e}")
                increment_provider_failures(self.name)
                return ProviderOutcome.empty(self.name, error=str(e))
            except Exception as e:
                self.logger.warning(f"Unusable payload: {e!r}")
                increment_provider_failures(self.name)
                return ProviderOutcome.empty(self.name, error=repr(e))

        if outcome.is_empty:
            self.logger.debug(f"No results for {query!r}")
        else:
            self.logger.debug(f"{len(outcome.results)} results for {query!r}")

        return outcome

    async def _fetch(self, query: str) -> ProviderOutcome:
        raise NotImplementedError

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            ProviderConnectionError: Transport failure or timeout
            ProviderResponseError: Non-success HTTP status
            ProviderPayloadError: Body is not JSON
        """
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderResponseError(
                f"HTTP {e.response.status_code}",
                provider=self.name,
                status_code=e.response.status_code,
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise ProviderConnectionError(
                f"Request failed: {e.__class__.__name__}",
                provider=self.name,
                details={"url": url},
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise ProviderPayloadError(
                "Response body is not valid JSON",
                provider=self.name,
                details={"url": url},
            ) from e

    def _expect_mapping(self, data: Any) -> dict[str, Any]:
        """Ensure a decoded body is a JSON object."""
        if not isinstance(data, dict):
            raise ProviderPayloadError(
                f"Expected a JSON object, got {type(data).__name__}",
                provider=self.name,
            )
        return data

    def _expect_list(self, value: Any, field: str) -> list[Any]:
        """Ensure a payload field is a list; a missing field is an empty list."""
        if value is None:
            return []
        if not isinstance(value, list):
            raise ProviderPayloadError(
                f"Expected a list for {field!r}",
                provider=self.name,
            )
        return value

    def _title(self, text: str | None) -> str:
        return clean_text(text, self.settings.title_length)

    def _snippet(self, text: str | None) -> str:
        return clean_text(text, self.settings.snippet_length)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

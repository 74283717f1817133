"""
Exceptions raised by the Answer Engine.

    AnswerEngineError
    ├── ConfigurationError
    ├── ProviderError
    │   ├── ProviderConnectionError
    │   ├── ProviderResponseError
    │   └── ProviderPayloadError
    └── QueryError
        └── InvalidQueryError

ProviderError and its subclasses are internal: adapters raise them from
the shared HTTP helpers and convert them to empty outcomes in `fetch`.
InvalidQueryError is the only error an aggregate request can raise.
"""

from typing import Any


class AnswerEngineError(Exception):
    """
    Root of the package's exceptions.

    Attributes:
        message: What went wrong
        details: Extra context, rendered after the message by __str__
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, details={self.details!r})"


class ConfigurationError(AnswerEngineError):
    """Settings file unreadable as a mapping, or a value out of bounds."""


class ProviderError(AnswerEngineError):
    """A single content-provider call failed."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if provider:
            details.setdefault("provider", provider)
        super().__init__(message, details)
        self.provider = provider


class ProviderConnectionError(ProviderError):
    """Transport failure: DNS, connect, or timeout."""


class ProviderResponseError(ProviderError):
    """The provider answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, provider, details)
        self.status_code = status_code


class ProviderPayloadError(ProviderError):
    """The body is not JSON or lacks the expected structure."""


class QueryError(AnswerEngineError):
    """An aggregate request could not be issued."""


class InvalidQueryError(QueryError):
    """Blank query or unknown source filter."""

    MAX_QUERY_IN_DETAILS = 100

    def __init__(
        self,
        message: str,
        query: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if query:
            shown = query[:self.MAX_QUERY_IN_DETAILS]
            details["query"] = shown + "..." if len(query) > len(shown) else shown
        super().__init__(message, details)
        self.query = query

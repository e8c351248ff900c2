"""Error taxonomy for the request lifecycle.

Each failing phase raises one of the :class:`PipelineError` subclasses below.
The handler never inspects them beyond their type: the instance is handed
untouched to the serializer configured for that outcome.
"""

from __future__ import annotations

from typing import Any


class PipelineError(Exception):
    """Base class for errors that terminate one request.

    Args:
        message: Human-readable message, used as the error string.
        detail: Optional JSON-encodable payload.  Serializers prefer it over
            the message when they can encode it.
    """

    def __init__(self, message: str = "", *, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        return self.message


class AuthenticationError(PipelineError):
    """The request carried missing or invalid credentials."""


class ValidationError(PipelineError):
    """The deserialized input failed its own validation."""


class ProcessingError(PipelineError):
    """The processor failed to produce a result."""


class NotFoundError(PipelineError):
    """The processor produced no result for the requested resource."""

    def __init__(self, message: str = "Not found", *, detail: Any = None) -> None:
        super().__init__(message, detail=detail)


class AuthorizationError(PipelineError):
    """The authenticated caller may not access the produced output."""


class HandlerConfigError(ValueError):
    """A handler was constructed without one or more mandatory collaborators."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = tuple(missing)
        super().__init__("handler config is missing required collaborators: " + ", ".join(missing))


class ConfigError(ValueError):
    """Configuration file could not be parsed or validated."""

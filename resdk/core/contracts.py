"""Capability contracts implemented by pluggable phase collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from starlette.requests import Request


@runtime_checkable
class Input(Protocol):
    """Deserialized request parameters that can validate themselves."""

    def validate(self) -> None:
        """Raise ``ValidationError`` when the parameters are invalid."""


@runtime_checkable
class Authorizer(Protocol):
    """Optional capability of a processor output that needs an access check."""

    def authorize(self, auth: Any) -> None:
        """Raise ``AuthorizationError`` when *auth* may not access this output.

        *auth* is the value returned by ``Authenticator.authenticate``, or
        ``None`` when the handler has no authenticator.
        """


class Authenticator(Protocol):
    """Phase I: authentication."""

    async def authenticate(self, request: Request) -> Any:
        """Return auth details for the caller, or raise ``AuthenticationError``."""


class Deserializer(Protocol):
    """Phase II: deserialization.

    Deserialization never signals failure.  Malformed input is reported by
    the returned object's ``validate()``.
    """

    async def deserialize(self, request: Request) -> Input:
        """Build an ``Input`` from the incoming request."""


class Processor(Protocol):
    """Phase III: processing.  This is where the business logic goes."""

    async def process(self, data: Input) -> Any:
        """Return the output for *data*, or ``None`` if no resource matches.

        Raising any exception is treated as a processing failure.
        """


class ResponseWriter(Protocol):
    """Sink a serializer writes exactly one complete response into."""

    def set_status(self, status_code: int) -> None:
        """Set the HTTP status code."""

    def set_header(self, name: str, value: str) -> None:
        """Set one response header, replacing any previous value."""

    def write(self, data: bytes) -> None:
        """Append bytes to the response body."""


class Serializer(Protocol):
    """Phase IV: serialization of a value onto the response sink."""

    def serialize(self, value: Any, writer: ResponseWriter, request: Request) -> None:
        """Write status, headers and body for *value*.

        Failures while serializing are handled here; nothing is raised back
        into the handler.
        """

"""Request lifecycle handler.

``BaseHandler`` runs the fixed phase chain for each request and then hands
the terminal value to exactly one serializer: the success serializer, or the
error serializer configured for the outcome that stopped the chain.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

from starlette.requests import Request

from resdk.core.contracts import Authenticator, Deserializer, Processor, ResponseWriter, Serializer
from resdk.core.errors import HandlerConfigError
from resdk.core.models import Outcome
from resdk.core.pipeline import Phase, Pipeline
from resdk.core.response import ResponseBuffer
from resdk.pipeline import (
    AuthenticationMiddleware,
    AuthorizationMiddleware,
    ProcessingMiddleware,
    ValidationMiddleware,
)
from resdk.telemetry.base import DURATION_METRIC, OUTCOMES_METRIC, TelemetryPort

if TYPE_CHECKING:
    from starlette.types import Receive, Scope, Send

SERIALIZER_SLOTS: dict[Outcome, str] = {
    "success": "success_serializer",
    "authentication_error": "authentication_error_serializer",
    "validation_error": "validation_error_serializer",
    "processing_error": "processing_error_serializer",
    "not_found": "not_found_serializer",
    "authorization_error": "authorization_error_serializer",
}

_REQUIRED_COLLABORATORS = ("deserializer", "processor")


@dataclass(frozen=True, slots=True, kw_only=True)
class HandlerConfig:
    """Collaborators for one handler, fixed at construction.

    ``authenticator`` and ``telemetry`` are optional.  Every other slot must
    be set before a ``BaseHandler`` is built from the config;
    ``with_json_defaults`` can fill the serializer slots.
    """

    # Phase I: set to None when no authentication is needed.
    authenticator: Authenticator | None = None
    # Phase II
    deserializer: Deserializer | None = None
    # Phase III
    processor: Processor | None = None
    # Phase IV
    success_serializer: Serializer | None = None
    authentication_error_serializer: Serializer | None = None
    validation_error_serializer: Serializer | None = None
    processing_error_serializer: Serializer | None = None
    not_found_serializer: Serializer | None = None
    authorization_error_serializer: Serializer | None = None

    telemetry: TelemetryPort | None = None

    def serializer_for(self, outcome: Outcome) -> Serializer | None:
        """Return the serializer configured for *outcome*."""
        return getattr(self, SERIALIZER_SLOTS[outcome])

    def missing(self) -> list[str]:
        """Names of mandatory slots that are still unset."""
        required = (*_REQUIRED_COLLABORATORS, *SERIALIZER_SLOTS.values())
        return [f.name for f in fields(self) if f.name in required and getattr(self, f.name) is None]


class BaseHandler:
    """ASGI handler implementing the request lifecycle.

    The handler only holds its immutable config and the phase chain built
    from it, so one instance may serve any number of concurrent requests.
    """

    __slots__ = ("_config", "_pipeline")

    def __init__(self, config: HandlerConfig) -> None:
        missing = config.missing()
        if missing:
            raise HandlerConfigError(missing)
        self._config = config
        self._pipeline = Pipeline(self._build_phases(config))

    @property
    def config(self) -> HandlerConfig:
        return self._config

    @staticmethod
    def _build_phases(config: HandlerConfig) -> list[Phase]:
        phases: list[Phase] = []
        if config.authenticator is not None:
            phases.append(AuthenticationMiddleware(authenticator=config.authenticator))
        phases.append(ValidationMiddleware(deserializer=config.deserializer))
        phases.append(ProcessingMiddleware(processor=config.processor))
        phases.append(AuthorizationMiddleware())
        return phases

    async def handle(self, request: Request, writer: ResponseWriter) -> Outcome:
        """Handle one request, writing the response into *writer*.

        Returns the terminal outcome of the request.
        """
        started = time.monotonic()
        ctx = await self._pipeline.run(request)

        value: Any
        if ctx.outcome is None:
            outcome: Outcome = "success"
            value = ctx.output.value
        else:
            outcome = ctx.outcome
            value = ctx.error

        try:
            self._config.serializer_for(outcome).serialize(value, writer, request)
        finally:
            self._record(outcome, time.monotonic() - started)
        return outcome

    def _record(self, outcome: Outcome, elapsed: float) -> None:
        telemetry = self._config.telemetry
        if telemetry is None:
            return
        labels = (("outcome", outcome),)
        telemetry.incr(OUTCOMES_METRIC, labels=labels)
        telemetry.timing(DURATION_METRIC, elapsed, labels=labels)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            raise TypeError(f"{type(self).__name__} only serves http scopes, got {scope['type']!r}")
        request = Request(scope, receive=receive)
        writer = ResponseBuffer()
        await self.handle(request, writer)
        response = writer.to_response()
        await response(scope, receive, send)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._pipeline!r})"

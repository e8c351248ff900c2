"""Phase chain for one request.

Each phase of the request lifecycle is a middleware: it either calls
``next()`` to pass control to the following phase, or records a failed
outcome with ``ctx.fail()`` which halts the chain.  Serialization is not a
phase of the chain; the handler picks the serializer once the chain returns.

Usage::

    pipeline = Pipeline([
        AuthenticationMiddleware(authenticator=authenticator),
        ValidationMiddleware(deserializer=deserializer),
        ProcessingMiddleware(processor=processor),
        AuthorizationMiddleware(),
    ])
    ctx = await pipeline.run(request)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from resdk.core.contracts import Input
from resdk.core.models import NO_AUTH, AuthContext, Outcome, Output

if TYPE_CHECKING:
    from starlette.requests import Request


@dataclass
class PipelineContext:
    """Per-request state flowing through the phase chain.

    Attributes:
        request: The incoming request.  Read by collaborators, never mutated.
        auth: Auth details from the authentication phase, ``NO_AUTH`` when
            no authenticator ran.
        data: Deserialized input, set by the validation phase.
        output: Processor result, set by the processing phase.
        outcome: Failed outcome recorded by the phase that stopped the
            chain.  ``None`` while every phase has succeeded.
        error: The error value for ``outcome``.
        halted: When ``True``, no further phase runs.
    """

    request: Request
    auth: AuthContext = NO_AUTH
    data: Input | None = None
    output: Output | None = None
    outcome: Outcome | None = None
    error: BaseException | None = None
    halted: bool = False

    def fail(self, outcome: Outcome, error: BaseException) -> None:
        """Record a terminal error outcome and stop the chain."""
        self.outcome = outcome
        self.error = error
        self.halt()

    def halt(self) -> None:
        """Signal the pipeline to stop after this phase."""
        self.halted = True


NextFn = Callable[[PipelineContext], Awaitable[None]]
"""Signature for the ``next`` callback passed to each phase."""


@runtime_checkable
class Phase(Protocol):
    """Protocol for one lifecycle phase.

    Implementations must be callable with ``(ctx, next)`` and either call
    ``await next(ctx)`` to continue or ``ctx.fail(...)`` to short-circuit.
    """

    async def __call__(self, ctx: PipelineContext, next: NextFn) -> None: ...


class Pipeline:
    """Ordered chain of phases run for each request."""

    __slots__ = ("_layers",)

    def __init__(self, layers: list[Phase]) -> None:
        self._layers = tuple(layers)

    async def run(self, request: Request) -> PipelineContext:
        """Run *request* through the chain and return the final context."""
        ctx = PipelineContext(request=request)
        await self._execute(ctx, index=0)
        return ctx

    async def _execute(self, ctx: PipelineContext, index: int) -> None:
        if ctx.halted or index >= len(self._layers):
            return
        layer = self._layers[index]
        await layer(ctx, lambda c: self._execute(c, index + 1))

    def __len__(self) -> int:
        return len(self._layers)

    def __repr__(self) -> str:
        names = [type(m).__name__ for m in self._layers]
        return f"Pipeline({' → '.join(names)})"

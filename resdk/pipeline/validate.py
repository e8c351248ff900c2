"""Validation middleware: phase II.

Deserialization cannot fail; the deserialized input reports problems
through its own ``validate()``.  Any exception it raises, a
``pydantic.ValidationError`` included, is the validation error.
"""

from __future__ import annotations

from resdk.core.contracts import Deserializer
from resdk.core.pipeline import NextFn, PipelineContext


class ValidationMiddleware:
    """Deserialize the request and validate the resulting input."""

    def __init__(self, *, deserializer: Deserializer) -> None:
        self._deserializer = deserializer

    async def __call__(self, ctx: PipelineContext, next: NextFn) -> None:
        data = await self._deserializer.deserialize(ctx.request)
        try:
            data.validate()
        except Exception as exc:
            ctx.fail("validation_error", exc)
            return

        ctx.data = data
        await next(ctx)

"""Processing middleware: phase III.

Any exception raised by the processor is a processing failure.  A ``None``
result is not an error: it ends the request as ``not_found``.
"""

from __future__ import annotations

from resdk.core.contracts import Processor
from resdk.core.errors import NotFoundError
from resdk.core.models import as_output
from resdk.core.pipeline import NextFn, PipelineContext


class ProcessingMiddleware:
    """Run the processor and normalize its result into an output."""

    def __init__(self, *, processor: Processor) -> None:
        self._processor = processor

    async def __call__(self, ctx: PipelineContext, next: NextFn) -> None:
        if ctx.data is None:
            raise RuntimeError("processing phase reached without validated input")

        try:
            result = await self._processor.process(ctx.data)
        except Exception as exc:
            ctx.fail("processing_error", exc)
            return

        output = as_output(result)
        if output is None:
            ctx.fail("not_found", NotFoundError())
            return

        ctx.output = output
        # Input is not needed past this phase.
        ctx.data = None
        await next(ctx)

"""Authorization middleware: optional phase between processing and success."""

from __future__ import annotations

from resdk.core.models import AuthorizableOutput
from resdk.core.pipeline import NextFn, PipelineContext


class AuthorizationMiddleware:
    """Check access to an ``AuthorizableOutput``; plain outputs pass through."""

    async def __call__(self, ctx: PipelineContext, next: NextFn) -> None:
        output = ctx.output
        if isinstance(output, AuthorizableOutput):
            try:
                output.authorize(ctx.auth)
            except Exception as exc:
                ctx.fail("authorization_error", exc)
                return

        await next(ctx)

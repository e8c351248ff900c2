"""Authentication middleware: phase I.

Only installed when the handler has an authenticator; without one the
context keeps ``NO_AUTH`` and this phase never runs.  Whatever the
authenticator raises is the authentication error, passed on untouched.
"""

from __future__ import annotations

from resdk.core.contracts import Authenticator
from resdk.core.pipeline import NextFn, PipelineContext


class AuthenticationMiddleware:
    """Capture auth details, or halt with ``authentication_error``."""

    def __init__(self, *, authenticator: Authenticator) -> None:
        self._authenticator = authenticator

    async def __call__(self, ctx: PipelineContext, next: NextFn) -> None:
        try:
            ctx.auth = await self._authenticator.authenticate(ctx.request)
        except Exception as exc:
            ctx.fail("authentication_error", exc)
            return

        await next(ctx)

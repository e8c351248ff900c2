"""Domain models for the request lifecycle."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from resdk.core.contracts import Authorizer

type Outcome = Literal[
    "success",
    "authentication_error",
    "validation_error",
    "processing_error",
    "not_found",
    "authorization_error",
]
type AuthContext = Any

OUTCOMES: tuple[Outcome, ...] = (
    "success",
    "authentication_error",
    "validation_error",
    "processing_error",
    "not_found",
    "authorization_error",
)

# Auth context seen by authorizers when no authenticator is configured.
NO_AUTH: AuthContext = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PlainOutput:
    """Processor result that is sent as-is, without an authorization check."""

    value: Any


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizableOutput:
    """Processor result guarded by an authorization hook.

    ``authorize`` receives the request's auth context and raises
    :class:`~resdk.core.errors.AuthorizationError` to deny access.
    """

    value: Any
    authorize: Callable[[AuthContext], None]


type Output = PlainOutput | AuthorizableOutput


def as_output(result: Any) -> Output | None:
    """Normalize a processor result into the output sum type.

    ``None`` stays ``None`` (no result).  Values already wrapped are returned
    unchanged; bare values exposing ``authorize(auth)`` become
    :class:`AuthorizableOutput`, anything else :class:`PlainOutput`.
    """
    if result is None:
        return None
    if isinstance(result, (PlainOutput, AuthorizableOutput)):
        return result
    if isinstance(result, Authorizer):
        return AuthorizableOutput(value=result, authorize=result.authorize)
    return PlainOutput(value=result)

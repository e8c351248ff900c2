"""resdk - pluggable request lifecycle for ASGI handlers."""

__version__ = "0.1.0"
__logo__ = "⛓"

from resdk.core import (  # noqa: E402
    NO_AUTH,
    AuthenticationError,
    AuthorizableOutput,
    AuthorizationError,
    BaseHandler,
    HandlerConfig,
    NotFoundError,
    PlainOutput,
    ProcessingError,
    ResponseBuffer,
    ValidationError,
)
from resdk.handlers import JsonHandler, new_json_handler, with_json_defaults  # noqa: E402

__all__ = [
    "NO_AUTH",
    "AuthenticationError",
    "AuthorizableOutput",
    "AuthorizationError",
    "BaseHandler",
    "HandlerConfig",
    "JsonHandler",
    "NotFoundError",
    "PlainOutput",
    "ProcessingError",
    "ResponseBuffer",
    "ValidationError",
    "__version__",
    "new_json_handler",
    "with_json_defaults",
]

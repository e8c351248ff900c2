"""Request lifecycle core: contracts, errors and the handler."""

from resdk.core.contracts import (
    Authenticator,
    Authorizer,
    Deserializer,
    Input,
    Processor,
    ResponseWriter,
    Serializer,
)
from resdk.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConfigError,
    HandlerConfigError,
    NotFoundError,
    PipelineError,
    ProcessingError,
    ValidationError,
)
from resdk.core.handler import BaseHandler, HandlerConfig
from resdk.core.models import NO_AUTH, OUTCOMES, AuthorizableOutput, Outcome, PlainOutput, as_output
from resdk.core.response import ResponseBuffer

__all__ = [
    "NO_AUTH",
    "OUTCOMES",
    "AuthenticationError",
    "Authenticator",
    "AuthorizableOutput",
    "AuthorizationError",
    "Authorizer",
    "BaseHandler",
    "ConfigError",
    "Deserializer",
    "HandlerConfig",
    "HandlerConfigError",
    "Input",
    "NotFoundError",
    "Outcome",
    "PipelineError",
    "PlainOutput",
    "ProcessingError",
    "Processor",
    "ResponseBuffer",
    "ResponseWriter",
    "Serializer",
    "ValidationError",
    "as_output",
]

"""JSON response serializers.

Success responses encode the output value directly as the body.  Error
responses use the envelope ``{"error": <value or message>}``: the error's
payload is used when it can be encoded on its own, otherwise its string
message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pydantic
from loguru import logger
from pydantic_core import PydanticSerializationError, to_json

from resdk.core.errors import NotFoundError

if TYPE_CHECKING:
    from starlette.requests import Request

    from resdk.core.contracts import ResponseWriter

JSON_CONTENT_TYPE = "application/json"
_ENCODE_FAILED = {"error": "response serialization failed"}


def error_payload(value: Any) -> Any:
    """Return the JSON value placed under ``"error"`` for *value*.

    Exceptions contribute their ``detail`` (or pydantic's error list) when
    it is encodable; other values are used as-is when encodable.  Everything
    else falls back to ``str(value)``.
    """
    if isinstance(value, pydantic.ValidationError):
        candidate = value.errors(include_url=False, include_context=False, include_input=False)
    elif isinstance(value, BaseException):
        candidate = getattr(value, "detail", None)
        if candidate is None:
            return str(value)
    else:
        candidate = value

    try:
        to_json(candidate)
    except PydanticSerializationError:
        return str(value)
    return candidate


def _write(writer: ResponseWriter, status_code: int, body: bytes, content_type: str) -> None:
    writer.set_header("Content-Type", content_type)
    writer.set_status(status_code)
    writer.write(body)


@dataclass(frozen=True, slots=True)
class JsonSerializer:
    """Encode the output value as the JSON response body."""

    status_code: int = 200
    content_type: str = JSON_CONTENT_TYPE

    def serialize(self, value: Any, writer: ResponseWriter, request: Request) -> None:
        try:
            body = to_json(value)
        except PydanticSerializationError as exc:
            logger.error(f"Failed to encode {type(value).__name__} response for {request.url.path}: {exc}")
            _write(writer, 500, to_json(_ENCODE_FAILED), self.content_type)
            return
        _write(writer, self.status_code, body, self.content_type)


@dataclass(frozen=True, slots=True)
class JsonErrorSerializer:
    """Encode an error value in the standard ``{"error": ...}`` envelope.

    Attributes:
        status_code: HTTP status for the response.
        error: When set, replaces whatever error value is serialized.
        content_type: Value of the ``Content-Type`` header.
    """

    status_code: int = 500
    error: Any = None
    content_type: str = JSON_CONTENT_TYPE

    def serialize(self, value: Any, writer: ResponseWriter, request: Request) -> None:
        if self.error is not None:
            value = self.error

        if self.status_code >= 500 and isinstance(value, BaseException):
            logger.opt(exception=value).error(
                f"{request.method} {request.url.path} failed with {type(value).__name__}: {value}"
            )

        body = to_json({"error": error_payload(value)})
        _write(writer, self.status_code, body, self.content_type)


@dataclass(frozen=True, slots=True)
class JsonNotFoundSerializer(JsonErrorSerializer):
    """Error serializer fixed to a 404 ``{"error": "Not found"}`` response."""

    status_code: int = 404
    error: Any = field(default_factory=NotFoundError)

"""Response serializers."""

from resdk.serializers.json import (
    JSON_CONTENT_TYPE,
    JsonErrorSerializer,
    JsonNotFoundSerializer,
    JsonSerializer,
    error_payload,
)

__all__ = [
    "JSON_CONTENT_TYPE",
    "JsonErrorSerializer",
    "JsonNotFoundSerializer",
    "JsonSerializer",
    "error_payload",
]

"""JSON handler: ``BaseHandler`` with default JSON serializers.

Any serializer slot left unset in the ``HandlerConfig`` is filled with a
JSON serializer using the conventional status code for its outcome
(200, 401, 400, 500, 404, 403).  Explicitly configured serializers are
kept as they are.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from resdk.config.schema import ResponsesConfig
from resdk.core.contracts import Serializer
from resdk.core.errors import NotFoundError
from resdk.core.handler import SERIALIZER_SLOTS, BaseHandler, HandlerConfig
from resdk.serializers.json import JsonErrorSerializer, JsonNotFoundSerializer, JsonSerializer


def default_json_serializers(settings: ResponsesConfig | None = None) -> dict[str, Serializer]:
    """Default JSON serializer per ``HandlerConfig`` slot name."""
    settings = settings or ResponsesConfig()
    content_type = settings.content_type
    defaults: dict[str, Serializer] = {}
    for outcome, slot in SERIALIZER_SLOTS.items():
        status_code = settings.status_for(outcome)
        if outcome == "success":
            defaults[slot] = JsonSerializer(status_code=status_code, content_type=content_type)
        elif outcome == "not_found":
            defaults[slot] = JsonNotFoundSerializer(
                status_code=status_code,
                error=NotFoundError(settings.not_found_message),
                content_type=content_type,
            )
        else:
            defaults[slot] = JsonErrorSerializer(status_code=status_code, content_type=content_type)
    return defaults


def with_json_defaults(config: HandlerConfig, settings: ResponsesConfig | None = None) -> HandlerConfig:
    """Return a copy of *config* with every unset serializer slot filled."""
    unset = {
        slot: serializer
        for slot, serializer in default_json_serializers(settings).items()
        if getattr(config, slot) is None
    }
    return replace(config, **unset) if unset else config


class JsonHandler(BaseHandler):
    """``BaseHandler`` answering in JSON with standard status codes."""

    __slots__ = ()

    def __init__(self, config: HandlerConfig, settings: ResponsesConfig | None = None) -> None:
        super().__init__(with_json_defaults(config, settings))


def new_json_handler(*, settings: ResponsesConfig | None = None, **collaborators: Any) -> JsonHandler:
    """Build a ``JsonHandler`` from collaborators passed as keywords.

    Example::

        handler = new_json_handler(
            authenticator=BearerAuth(tokens),
            deserializer=ItemQuery(),
            processor=ItemLookup(db),
        )
    """
    return JsonHandler(HandlerConfig(**collaborators), settings=settings)

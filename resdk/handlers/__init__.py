"""Handlers composed on top of the core lifecycle."""

from resdk.handlers.json import JsonHandler, default_json_serializers, new_json_handler, with_json_defaults

__all__ = ["JsonHandler", "default_json_serializers", "new_json_handler", "with_json_defaults"]

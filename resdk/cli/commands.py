"""CLI commands for resdk."""

from . import config_commands as _config_commands  # noqa: F401
from . import serve_commands as _serve_commands  # noqa: F401
from .core import app

__all__ = ["app"]

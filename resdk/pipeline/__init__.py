"""Lifecycle phases: one middleware per phase.

See ``core/pipeline.py`` for the runner and ``core/handler.py`` for the
order the handler installs them in.
"""

from resdk.pipeline.authenticate import AuthenticationMiddleware
from resdk.pipeline.authorize import AuthorizationMiddleware
from resdk.pipeline.process import ProcessingMiddleware
from resdk.pipeline.validate import ValidationMiddleware

__all__ = [
    "AuthenticationMiddleware",
    "AuthorizationMiddleware",
    "ProcessingMiddleware",
    "ValidationMiddleware",
]

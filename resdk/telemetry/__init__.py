"""Telemetry backends for handler observability.

Provides both in-memory (for testing) and Prometheus (for production) backends.
"""

from resdk.telemetry.base import DURATION_METRIC, OUTCOMES_METRIC, Labels, TelemetryPort
from resdk.telemetry.inmemory import InMemoryTelemetry
from resdk.telemetry.prometheus import PrometheusConfig, PrometheusTelemetry

__all__ = [
    "DURATION_METRIC",
    "OUTCOMES_METRIC",
    "InMemoryTelemetry",
    "Labels",
    "PrometheusConfig",
    "PrometheusTelemetry",
    "TelemetryPort",
]

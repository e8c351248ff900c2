"""Telemetry port used by handlers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

type Labels = tuple[tuple[str, str], ...]

# Metric names recorded by BaseHandler, both labelled with ("outcome", <name>).
OUTCOMES_METRIC = "pipeline_outcomes_total"
DURATION_METRIC = "pipeline_duration_seconds"


@runtime_checkable
class TelemetryPort(Protocol):
    """Metrics sink a handler reports to.

    A handler records one ``OUTCOMES_METRIC`` increment and one
    ``DURATION_METRIC`` timing per request.  Processors may share the same
    backend for their own metrics.
    """

    def incr(self, name: str, value: int = 1, labels: Labels = ()) -> None:
        """Increase counter *name* by *value*."""

    def gauge(self, name: str, value: float, labels: Labels = ()) -> None:
        """Set gauge *name* to *value*."""

    def histogram(self, name: str, value: float, labels: Labels = ()) -> None:
        """Observe *value* in histogram *name*."""

    def timing(self, name: str, value: float, labels: Labels = ()) -> None:
        """Record a duration in seconds."""

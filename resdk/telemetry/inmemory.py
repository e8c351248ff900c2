"""In-memory telemetry backend for tests and local runs."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from resdk.core.models import OUTCOMES, Outcome
from resdk.telemetry.base import OUTCOMES_METRIC, Labels

type MetricKey = tuple[str, Labels]


@dataclass
class InMemoryTelemetry:
    """Keeps every recorded value, keyed by metric name and label set."""

    counters: defaultdict[MetricKey, int] = field(default_factory=lambda: defaultdict(int))
    gauges: dict[MetricKey, float] = field(default_factory=dict)
    observations: defaultdict[MetricKey, list[float]] = field(default_factory=lambda: defaultdict(list))

    def incr(self, name: str, value: int = 1, labels: Labels = ()) -> None:
        self.counters[(name, tuple(labels))] += value

    def gauge(self, name: str, value: float, labels: Labels = ()) -> None:
        self.gauges[(name, tuple(labels))] = value

    def histogram(self, name: str, value: float, labels: Labels = ()) -> None:
        self.observations[(name, tuple(labels))].append(value)

    # Durations are plain observations here.
    timing = histogram

    def get_counter(self, name: str, labels: Labels = ()) -> int:
        return self.counters.get((name, tuple(labels)), 0)

    def get_timing_values(self, name: str, labels: Labels = ()) -> list[float]:
        return list(self.observations.get((name, tuple(labels)), ()))

    def outcome_counts(self) -> dict[Outcome, int]:
        """Requests handled so far, per terminal outcome."""
        return {outcome: self.get_counter(OUTCOMES_METRIC, (("outcome", outcome),)) for outcome in OUTCOMES}

    def reset(self) -> None:
        self.counters.clear()
        self.gauges.clear()
        self.observations.clear()

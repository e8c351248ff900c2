"""Prometheus metrics backend for handler observability.

Usage:
    telemetry = PrometheusTelemetry(PrometheusConfig(port=9100))
    telemetry.start()
    handler = JsonHandler(HandlerConfig(..., telemetry=telemetry))

    # Metrics available at http://localhost:9100/metrics
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, start_http_server

from resdk.core.models import OUTCOMES
from resdk.telemetry.base import DURATION_METRIC, OUTCOMES_METRIC, Labels

if TYPE_CHECKING:
    from resdk.config.schema import TelemetryConfig


@dataclass
class PrometheusConfig:
    """Configuration for Prometheus telemetry backend."""

    enabled: bool = True
    port: int = 9100
    host: str = "127.0.0.1"  # localhost only by default
    namespace: str = "resdk"


class PrometheusTelemetry:
    """Prometheus-backed telemetry.

    Registers the standard handler metrics up front; any other name passed
    to ``incr``/``gauge``/``histogram`` gets an ad-hoc metric on first use.
    """

    def __init__(
        self,
        config: PrometheusConfig | None = None,
        registry: CollectorRegistry = REGISTRY,
    ) -> None:
        self._config = config or PrometheusConfig()
        self._registry = registry
        self._metrics: dict[str, Counter | Gauge | Histogram] = {}
        self._started = False

        if not self._config.enabled:
            logger.info("Prometheus telemetry disabled")
            return

        self._register_standard_metrics()

    @classmethod
    def from_config(cls, config: TelemetryConfig, registry: CollectorRegistry = REGISTRY) -> PrometheusTelemetry:
        """Build from the ``telemetry`` section of the resdk config."""
        return cls(
            PrometheusConfig(enabled=config.enabled, host=config.host, port=config.port),
            registry=registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def _name(self, name: str) -> str:
        return f"{self._config.namespace}_{name}"

    def _register_standard_metrics(self) -> None:
        counter = Counter(
            self._name(OUTCOMES_METRIC),
            "Requests handled, by terminal outcome",
            labelnames=["outcome"],
            registry=self._registry,
        )
        histogram = Histogram(
            self._name(DURATION_METRIC),
            "Time spent in the request lifecycle, by terminal outcome",
            labelnames=["outcome"],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=self._registry,
        )
        # Pre-create label sets so every outcome is exported from the start.
        for outcome in OUTCOMES:
            counter.labels(outcome=outcome)
            histogram.labels(outcome=outcome)
        self._metrics[OUTCOMES_METRIC] = counter
        self._metrics[DURATION_METRIC] = histogram

    def start(self) -> None:
        """Start the Prometheus HTTP server."""
        if not self._config.enabled or self._started:
            return

        try:
            start_http_server(port=self._config.port, addr=self._config.host, registry=self._registry)
        except OSError as e:
            logger.error(f"Failed to start Prometheus server: {e}")
            self._config.enabled = False
            return
        self._started = True
        logger.info(
            f"Prometheus metrics server started on "
            f"http://{self._config.host}:{self._config.port}/metrics"
        )

    def _series(self, kind: type[Counter | Gauge | Histogram], name: str, labels: Labels):
        """Return the time series for *name* and *labels*, registering it on first use."""
        metric = self._metrics.get(name)
        if metric is None:
            metric = kind(
                self._name(name),
                f"{kind.__name__}: {name}",
                labelnames=[key for key, _ in labels],
                registry=self._registry,
            )
            self._metrics[name] = metric
        return metric.labels(**dict(labels)) if labels else metric

    def incr(self, name: str, value: int = 1, labels: Labels = ()) -> None:
        if self._config.enabled:
            self._series(Counter, name, labels).inc(value)

    def gauge(self, name: str, value: float, labels: Labels = ()) -> None:
        if self._config.enabled:
            self._series(Gauge, name, labels).set(value)

    def histogram(self, name: str, value: float, labels: Labels = ()) -> None:
        if self._config.enabled:
            self._series(Histogram, name, labels).observe(value)

    def timing(self, name: str, value: float, labels: Labels = ()) -> None:
        """Record a duration in seconds as a histogram observation."""
        self.histogram(name, value, labels)

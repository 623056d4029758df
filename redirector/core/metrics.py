"""
Click Metrics

Prometheus counters exposed on /metrics in the text exposition format.

Each application instance owns its own CollectorRegistry so tests can
build fresh instances without colliding on metric names.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

__all__ = ["ClickMetrics", "CONTENT_TYPE_LATEST"]


class ClickMetrics:
    """Per-slug click counter plus the default process/runtime collectors."""

    def __init__(self, registry: CollectorRegistry = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.clicks_total = Counter(
            "clicks_total",
            "Total redirects",
            labelnames=["slug"],
            registry=self.registry,
        )

    def increment(self, slug: str) -> None:
        self.clicks_total.labels(slug=slug).inc()

    def clicks_for(self, slug: str) -> float:
        value = self.registry.get_sample_value("clicks_total", {"slug": slug})
        return value or 0.0

    def render(self) -> bytes:
        return generate_latest(self.registry)

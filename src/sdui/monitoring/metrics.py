"""
Metrics Collection
Prometheus metrics for screen composition and interpretation
"""

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the screen service.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()

        # Composer
        self.screens_served = Counter(
            "sdui_screens_served_total",
            "Screen requests handled by the composer endpoint",
            ["status"],
            registry=self.registry,
        )
        self.composer_fallbacks = Counter(
            "sdui_composer_fallbacks_total",
            "Screens composed from generic defaults after a lookup miss",
            ["reason"],
            registry=self.registry,
        )
        self.compose_duration = Histogram(
            "sdui_compose_duration_seconds",
            "Time spent composing a screen",
            buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
            registry=self.registry,
        )

        # Interpreter
        self.view_cache_hits = Counter(
            "sdui_view_cache_hits_total",
            "Resolved subtrees served from the view cache",
            registry=self.registry,
        )
        self.view_cache_misses = Counter(
            "sdui_view_cache_misses_total",
            "View cache lookups that had to resolve",
            registry=self.registry,
        )
        self.binding_misses = Counter(
            "sdui_binding_misses_total",
            "Keys or tokens with no value in scope",
            ["kind"],
            registry=self.registry,
        )
        self.actions_dispatched = Counter(
            "sdui_actions_dispatched_total",
            "Action dispatches by outcome",
            ["outcome"],
            registry=self.registry,
        )
        self.screen_fetches = Counter(
            "sdui_screen_fetches_total",
            "Client screen fetches by outcome",
            ["outcome"],
            registry=self.registry,
        )

    def record_screen_served(self, status: str) -> None:
        self.screens_served.labels(status=status).inc()

    def record_fallback(self, reason: str) -> None:
        self.composer_fallbacks.labels(reason=reason).inc()

    @contextmanager
    def time_compose(self) -> Iterator[None]:
        """Observe compose duration for the enclosed block."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.compose_duration.observe(time.perf_counter() - start)

    def record_view_cache(self, hit: bool) -> None:
        (self.view_cache_hits if hit else self.view_cache_misses).inc()

    def record_binding_miss(self, kind: str) -> None:
        self.binding_misses.labels(kind=kind).inc()

    def record_action(self, outcome: str) -> None:
        self.actions_dispatched.labels(outcome=outcome).inc()

    def record_fetch(self, outcome: str) -> None:
        self.screen_fetches.labels(outcome=outcome).inc()

    def get_metrics(self) -> bytes:
        """Prometheus exposition format."""
        return generate_latest(self.registry)


# Process-wide collector
metrics_collector = MetricsCollector()

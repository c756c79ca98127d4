"""
Prometheus metrics for the studio.
Editor intents, runtime actions, exports, caches, AI generation and sync traffic.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest


FAST_BUCKETS = (0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0)
NETWORK_BUCKETS = (0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0)
MODEL_BUCKETS = (0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0)


class MetricsCollector:
    """
    Owns one registry of studio_* series.

    Each collector gets its own ``CollectorRegistry`` so several can coexist
    in a process (tests, embedded editors) without duplicate-name errors.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.start_time = time.monotonic()

        def counter(name: str, doc: str, *labels: str) -> Counter:
            return Counter(f"studio_{name}", doc, labels, registry=self.registry)

        def histogram(name: str, doc: str, label: str, buckets: tuple[float, ...]) -> Histogram:
            return Histogram(f"studio_{name}", doc, [label], buckets=buckets, registry=self.registry)

        def gauge(name: str, doc: str) -> Gauge:
            return Gauge(f"studio_{name}", doc, registry=self.registry)

        self.tree_mutations_total = counter("tree_mutations_total", "Editor intents by outcome", "intent", "status")
        self.tree_nodes = gauge("tree_nodes", "Nodes in the tree being edited")

        self.actions_total = counter("actions_total", "Interpreted actions by outcome", "action", "status")
        self.api_request_duration = histogram(
            "api_request_duration_seconds", "apiRequest round trip", "method", NETWORK_BUCKETS
        )

        self.exports_total = counter("exports_total", "Code exports", "dialect")
        self.export_duration = histogram("export_duration_seconds", "Code generation time", "dialect", FAST_BUCKETS)

        self.cache_hits = counter("cache_hits_total", "Cache hits", "cache_type")
        self.cache_misses = counter("cache_misses_total", "Cache misses", "cache_type")

        self.generations_total = counter("ai_generations_total", "DataList generations", "model", "status")
        self.generation_duration = histogram(
            "ai_generation_duration_seconds", "DataList generation time", "model", MODEL_BUCKETS
        )

        self.sync_messages = counter("sync_messages_total", "Collaboration messages", "direction")
        self.errors_total = counter("errors_total", "Handled errors", "error_type", "component")
        self.uptime = gauge("uptime_seconds", "Seconds since the collector started")

    # Editor

    def record_mutation(self, intent: str, status: str) -> None:
        self.tree_mutations_total.labels(intent=intent, status=status).inc()

    def set_tree_size(self, nodes: int) -> None:
        self.tree_nodes.set(nodes)

    # Runtime

    def record_action(self, action: str, status: str) -> None:
        self.actions_total.labels(action=action, status=status).inc()

    def record_api_request(self, method: str, duration: float) -> None:
        self.api_request_duration.labels(method=method).observe(duration)

    # Export

    def record_export(self, dialect: str, duration: float) -> None:
        self.exports_total.labels(dialect=dialect).inc()
        self.export_duration.labels(dialect=dialect).observe(duration)

    def record_cache_hit(self, cache_type: str) -> None:
        self.cache_hits.labels(cache_type=cache_type).inc()

    def record_cache_miss(self, cache_type: str) -> None:
        self.cache_misses.labels(cache_type=cache_type).inc()

    # Collaborators

    def record_generation(self, model: str, status: str, duration: float) -> None:
        self.generations_total.labels(model=model, status=status).inc()
        self.generation_duration.labels(model=model).observe(duration)

    def record_sync_message(self, direction: str) -> None:
        """``direction`` is "in" for received frames, "out" for published ones."""
        self.sync_messages.labels(direction=direction).inc()

    def record_error(self, error_type: str, component: str) -> None:
        self.errors_total.labels(error_type=error_type, component=component).inc()

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]) -> Iterator[None]:
        """Pass the block's elapsed seconds to ``callback``, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            callback(time.perf_counter() - start)

    def get_metrics(self) -> bytes:
        """Prometheus text exposition of this collector's registry."""
        self.uptime.set(time.monotonic() - self.start_time)
        return generate_latest(self.registry)


metrics_collector = MetricsCollector()

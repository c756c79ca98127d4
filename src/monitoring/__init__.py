"""Studio metrics: one Prometheus registry shared by editor, runtime, export and collaborators."""

from .metrics import MetricsCollector, metrics_collector

__all__ = [
    "MetricsCollector",
    "metrics_collector",
]

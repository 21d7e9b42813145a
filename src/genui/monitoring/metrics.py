"""
Metrics Collection
Prometheus metrics for schema loading, patching, rendering and streaming
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the engine.

    Pass a fresh ``CollectorRegistry`` to get an isolated collector.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = REGISTRY) -> None:
        self.registry = registry

        # Schema metrics
        self.schema_loads_total = Counter(
            "genui_schema_loads_total",
            "Total number of schema loads",
            ["status"],
            registry=registry,
        )
        self.validation_failures_total = Counter(
            "genui_validation_failures_total",
            "Total number of nodes that failed validation",
            ["type"],
            registry=registry,
        )

        # Patch metrics
        self.patch_operations_total = Counter(
            "genui_patch_operations_total",
            "Total number of patch operations",
            ["op", "status"],
            registry=registry,
        )

        # Render metrics
        self.renders_total = Counter(
            "genui_renders_total",
            "Total number of render passes",
            ["status"],
            registry=registry,
        )
        self.render_duration = Histogram(
            "genui_render_duration_seconds",
            "Render pass duration in seconds",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=registry,
        )

        # Stream metrics
        self.stream_chunks_total = Counter(
            "genui_stream_chunks_total",
            "Total number of stream chunks",
            ["type"],
            registry=registry,
        )
        self.stream_chunks_dropped = Counter(
            "genui_stream_chunks_dropped_total",
            "Chunks dropped for arriving out of sequence",
            registry=registry,
        )

        # State metrics
        self.schema_history_size = Gauge(
            "genui_schema_history_size",
            "Schemas currently held in history",
            registry=registry,
        )

    def record_schema_load(self, status: str) -> None:
        """Record a schema load."""
        self.schema_loads_total.labels(status=status).inc()

    def record_validation_failure(self, node_type: Optional[str]) -> None:
        """Record a validation failure."""
        self.validation_failures_total.labels(type=node_type or "unknown").inc()

    def record_patch_operation(self, op: str, status: str) -> None:
        self.patch_operations_total.labels(op=op, status=status).inc()

    def record_render(self, status: str, duration: float) -> None:
        """Record a render pass."""
        self.renders_total.labels(status=status).inc()
        self.render_duration.observe(duration)

    def record_stream_chunk(self, chunk_type: str) -> None:
        self.stream_chunks_total.labels(type=chunk_type).inc()

    def record_stream_chunk_dropped(self) -> None:
        self.stream_chunks_dropped.inc()

    def set_history_size(self, size: int) -> None:
        self.schema_history_size.set(size)

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]) -> Iterator[None]:
        """Context manager to measure operation duration."""
        start = time.perf_counter()
        try:
            yield
        finally:
            callback(time.perf_counter() - start)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry or REGISTRY)


# Global metrics collector instance
metrics_collector = MetricsCollector()

"""Prometheus metrics for clipboard storage operations."""

from prometheus_client import Counter, Histogram

# Storage operation metrics
storage_latency_ms = Histogram(
    "clipboard_storage_latency_ms",
    "Storage operation latency in milliseconds",
    ["operation", "outcome"],
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000],
)

storage_errors_total = Counter(
    "clipboard_storage_errors_total",
    "Total storage operation errors",
    ["operation", "reason"],
)

items_created_total = Counter(
    "clipboard_items_created_total",
    "Total clipboard items created",
    ["item_type"],
)


class PrometheusStorageMetrics:
    """Prometheus-based storage metrics implementation."""

    def record_latency(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record storage operation latency."""
        storage_latency_ms.labels(operation=operation, outcome=outcome).observe(latency_ms)

    def inc_error(self, operation: str, reason: str) -> None:
        """Increment error counter."""
        storage_errors_total.labels(operation=operation, reason=reason).inc()

    def inc_created(self, item_type: str) -> None:
        """Increment created-items counter."""
        items_created_total.labels(item_type=item_type).inc()

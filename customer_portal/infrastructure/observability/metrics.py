"""Prometheus metrics for store traffic, record mutations, and request latency"""

from prometheus_client import Counter, Histogram

# Record store metrics
store_operations_counter = Counter(
    "portal_store_operations_total",
    "Record store operations performed",
    ["collection", "operation"],  # load | save | delete
)

store_failures_counter = Counter(
    "portal_store_failures_total",
    "Record store operations that failed with an I/O or parse error",
    ["collection", "operation"],
)

# Domain metrics
record_mutations_counter = Counter(
    "portal_record_mutations_total",
    "Successful create/update/delete operations",
    ["collection", "operation"],  # create | update | upsert | delete
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_mutation(collection: str, operation: str) -> None:
    """Count a successful write against a collection"""
    record_mutations_counter.labels(collection=collection, operation=operation).inc()

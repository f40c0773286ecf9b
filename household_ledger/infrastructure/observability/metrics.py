"""Prometheus metrics for ledger views, data quality and HTTP latency"""

from prometheus_client import Counter, Histogram

# Aggregation metrics
aggregation_counter = Counter(
    "ledger_aggregation_total",
    "Ledger views computed",
    ["view"],  # statement | analytics | home
)

health_status_counter = Counter(
    "ledger_health_status_total",
    "Health reports issued by status band",
    ["status"],  # excellent | warning | critical
)

# Data quality
invalid_date_counter = Counter(
    "ledger_invalid_date_total",
    "Aggregations aborted by a transaction date that is not DD/MM/YYYY",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_aggregation(view: str, status: str | None = None) -> None:
    """Count a computed view and, for health reports, its status band"""
    aggregation_counter.labels(view=view).inc()
    if status is not None:
        health_status_counter.labels(status=status).inc()

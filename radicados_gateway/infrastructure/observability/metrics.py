"""Prometheus metrics for monitoring alert levels, reference data health, and store performance"""

from prometheus_client import Counter, Histogram, Gauge

# Alert metrics
alert_refresh_counter = Counter(
    "radicados_alert_refresh_total",
    "Alert refresh passes executed",
    ["trigger"],  # api | scheduler
)

pending_by_level_gauge = Gauge(
    "radicados_pending_by_alert_level",
    "Pending documents per alert level at the last refresh",
    ["level"],  # critical | warning | info | none | unresolved
)

flag_sync_failure_counter = Counter(
    "radicados_flag_sync_failures_total",
    "Failed batched alert flag updates",
)

# Reference data metrics
holiday_lookup_failures_counter = Counter(
    "radicados_holiday_lookup_failures_total",
    "Holiday lookups that failed open",
    ["source"],  # static | database | remote
)

# Record store metrics
store_request_latency_histogram = Histogram(
    "radicados_store_request_seconds",
    "Hosted table API response time",
    ["method"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

store_failure_counter = Counter(
    "radicados_store_failures_total",
    "Failed hosted table API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_alert_levels(levels: dict) -> None:
    """Publish how many pending documents fall into each alert level"""
    for level in ("critical", "warning", "info", "none", "unresolved"):
        pending_by_level_gauge.labels(level=level).set(levels.get(level, 0))

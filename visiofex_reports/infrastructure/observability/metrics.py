"""Prometheus metrics for monitoring API usage, cache efficiency, and report fallbacks"""

from prometheus_client import Counter, Histogram

# Payment API metrics
api_request_counter = Counter(
    "vxf_api_requests_total",
    "Requests sent to the payment API",
    ["endpoint", "outcome"],  # ok | transport_error | http_error
)

pages_fetched_counter = Counter(
    "vxf_pages_fetched_total",
    "Transaction list pages merged by the paginator",
)

# Cache metrics
cache_lookup_counter = Counter(
    "vxf_cache_lookups_total",
    "Cache lookups by result",
    ["result"],  # hit | miss | bypass
)

# Report metrics
report_counter = Counter(
    "vxf_reports_total",
    "Reports served by source",
    ["source"],  # aggregate | transactions
)

report_fallback_counter = Counter(
    "vxf_report_fallbacks_total",
    "Aggregate endpoint failures that triggered the transaction fallback",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_api_request(endpoint: str, outcome: str) -> None:
    """Record one outbound call, keyed by the path without its query string"""
    api_request_counter.labels(endpoint=endpoint.split("?", 1)[0], outcome=outcome).inc()

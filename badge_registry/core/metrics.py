"""Application metrics using the Prometheus client library.

All metrics are defined here so the service has a single inventory of
what it measures.  Other modules import the metric they own and
increment or observe it at the point of action.

Counters only go up (requests served, badges issued).  Gauges go up and
down or are set to a snapshot value (in-flight requests, badge count).
Histograms bucket observations so Prometheus can compute percentiles:

  histogram_quantile(0.95, rate(http_request_duration_seconds_bucket[5m]))

Prometheus scrapes GET /metrics; nothing is pushed from here.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Registry calls are in-memory; anything above 100ms is contention.
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Registry metrics
# ---------------------------------------------------------------------------

BADGES_ISSUED = Counter(
    "badges_issued_total",
    "Badges successfully issued",
)

BADGES_TRANSFERRED = Counter(
    "badges_transferred_total",
    "Badges successfully transferred to a new owner",
)

BADGE_REJECTIONS = Counter(
    "badge_operations_rejected_total",
    "Registry calls rejected without changing state",
    ["operation", "reason"],  # issue|transfer, unauthorized|not_found
)

BADGE_COUNT = Gauge(
    "badge_count",
    "Identifier of the most recently issued badge",
)

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "moodlog_requests_total",
    "Total HTTP requests processed by moodlog",
    ("method", "path", "status"),
)

REQUEST_LATENCY = Histogram(
    "moodlog_request_latency_seconds",
    "HTTP request latency in seconds",
    ("method", "path"),
)

REQUEST_ERRORS = Counter(
    "moodlog_request_errors_total",
    "HTTP requests resulting in server errors",
    ("method", "path", "status"),
)

API_COUNTER = Counter(
    "moodlog_api_hits_total",
    "API hits per endpoint",
    ("endpoint",),
)

ANALYTICS_REQUESTS = Counter(
    "moodlog_analytics_requests_total",
    "Analytics computations by operation",
    ("operation",),
)

ANALYTICS_LATENCY = Histogram(
    "moodlog_analytics_latency_seconds",
    "Analytics computation latency in seconds",
    ("operation",),
)

__all__ = [
    "ANALYTICS_LATENCY",
    "ANALYTICS_REQUESTS",
    "API_COUNTER",
    "REQUEST_COUNT",
    "REQUEST_ERRORS",
    "REQUEST_LATENCY",
]

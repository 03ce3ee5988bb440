"""Prometheus metrics definitions for ExpiryAlert."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "expiryalert_http_requests_total",
    "Total number of HTTP requests processed by the ExpiryAlert API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "expiryalert_http_request_duration_seconds",
    "Latency of HTTP requests processed by the ExpiryAlert API",
    ["method", "path"],
)

INVENTORY_MUTATIONS = Counter(
    "expiryalert_inventory_mutations_total",
    "Number of inventory mutations applied by operation",
    ["operation"],
)

STORAGE_RECOVERIES = Counter(
    "expiryalert_storage_recoveries_total",
    "Number of corrupt stored payloads replaced with an empty sequence",
    ["key"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "INVENTORY_MUTATIONS",
    "STORAGE_RECOVERIES",
]

"""Prometheus metrics for OnApp API calls.

Usage::

    from onapp_client.observability.metrics import API_REQUESTS_TOTAL

    API_REQUESTS_TOTAL.labels(method="GET", resource="users", status="200").inc()

``resource`` is the first path segment (``virtual_machines``, ``users``...)
so label cardinality stays bounded regardless of ids.
"""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# ---------------------------------------------------------------------------
# Outbound API request metrics
# ---------------------------------------------------------------------------

API_REQUESTS_TOTAL = Counter(
    "onapp_api_requests_total",
    "OnApp API requests by method, resource and status code.",
    labelnames=["method", "resource", "status"],
    registry=REGISTRY,
)

API_REQUEST_DURATION_SECONDS = Histogram(
    "onapp_api_request_duration_seconds",
    "OnApp API request latency in seconds.",
    labelnames=["method", "resource"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    registry=REGISTRY,
)

# ---------------------------------------------------------------------------
# Transaction correlation
# ---------------------------------------------------------------------------

TRANSACTION_LOOKUPS_TOTAL = Counter(
    "onapp_transaction_lookups_total",
    "Follow-up transaction lookups by outcome (found, missing, failed).",
    labelnames=["outcome"],
    registry=REGISTRY,
)


def resource_label(path: str) -> str:
    """Reduce an API path to its bounded-cardinality resource label."""
    head = path.lstrip("/").split("/", 1)[0]
    return head.split(".", 1)[0] or "root"


def metrics_text() -> tuple[bytes, str]:
    """Generate Prometheus exposition text and content-type header."""
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST

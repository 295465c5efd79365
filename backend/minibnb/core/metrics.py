"""Prometheus metrics for service operations and the response cache."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

REGISTRY = CollectorRegistry(auto_describe=True)

# Service-layer operation latency, labelled by outcome.
SERVICE_OPERATION_SECONDS = Histogram(
    "minibnb_service_operation_seconds",
    "Service operation duration in seconds",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

# Read-through lookups by outcome (hit, miss, error).
CACHE_LOOKUPS_TOTAL = Counter(
    "minibnb_cache_lookups_total",
    "Response cache lookups by outcome",
    ["outcome"],
    registry=REGISTRY,
)

# Conditional GETs answered with 304, split by whether the body came from cache.
CACHE_NOT_MODIFIED_TOTAL = Counter(
    "minibnb_cache_not_modified_total",
    "Conditional requests answered with 304 Not Modified",
    ["source"],
    registry=REGISTRY,
)

# Write-through population attempts that failed and were skipped.
CACHE_WRITE_FAILURES_TOTAL = Counter(
    "minibnb_cache_write_failures_total",
    "Response cache write-through failures",
    registry=REGISTRY,
)

# Keys removed by pattern invalidation, labelled by the domain helper that ran it.
CACHE_INVALIDATED_KEYS_TOTAL = Counter(
    "minibnb_cache_invalidated_keys_total",
    "Cache keys deleted by pattern invalidation",
    ["scope"],
    registry=REGISTRY,
)


__all__ = [
    "REGISTRY",
    "SERVICE_OPERATION_SECONDS",
    "CACHE_LOOKUPS_TOTAL",
    "CACHE_NOT_MODIFIED_TOTAL",
    "CACHE_WRITE_FAILURES_TOTAL",
    "CACHE_INVALIDATED_KEYS_TOTAL",
]

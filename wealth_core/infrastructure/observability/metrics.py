"""Prometheus metrics for settlement, deposit projection and store access"""

from prometheus_client import Counter, Histogram

# Settlement metrics
settlement_counter = Counter(
    "wealth_settlement_total",
    "Trip settlements computed",
)

settlement_transfers_histogram = Histogram(
    "wealth_settlement_transfers",
    "Transfers produced per settlement",
    buckets=[0, 1, 2, 3, 5, 8, 13, 21],
)

# Deposit metrics
deposit_projection_counter = Counter(
    "wealth_deposit_projection_total",
    "Deposit projections computed",
    ["deposit_type"],  # FD | RD
)

# Input validation
validation_failure_counter = Counter(
    "wealth_validation_failures_total",
    "Requests rejected by domain validation",
    ["kind"],  # exception class name
)

# Store API metrics
store_fetch_failures_counter = Counter(
    "store_fetch_failures_total",
    "Failed wealth tracker backend calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_settlement(transfer_count: int) -> None:
    """Record one settlement and how many transfers it needed"""
    settlement_counter.inc()
    settlement_transfers_histogram.observe(transfer_count)


def record_validation_failure(error: Exception) -> None:
    validation_failure_counter.labels(kind=type(error).__name__).inc()

"""Prometheus metrics for the SEAP Gateway service.

Metrics are organized into two categories:

Business Metrics (for Risk/Commercial):
- seap_evaluation_total: Evaluations by result
- seap_approved_amount_bucket: Approved amounts by bucket
- seap_approval_rate: Running approval rate
- seap_stage_rejections_total: Rejections by the stage that caused them

Technical Metrics (for Engineering/SRE):
- seap_evaluation_latency_seconds: End-to-end evaluation latency
- seap_bureau_request_latency_seconds: Credit bureau attempt latency
- seap_bureau_requests_total: Bureau queries by mode and status
- seap_bureau_failures_total: Bureau attempt failures by error type
- seap_bureau_retry_total: Bureau retries
- seap_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

evaluation_total = Counter(
    "seap_evaluation_total",
    "Total number of loan evaluations",
    ["result"],  # approved, rejected, pending
)

approved_amount_bucket = Counter(
    "seap_approved_amount_bucket",
    "Approved maximum amounts by bucket",
    ["bucket"],
)

approval_rate_gauge = Gauge(
    "seap_approval_rate",
    "Running approval rate since process start (0.0-1.0)",
)

stage_rejections = Counter(
    "seap_stage_rejections_total",
    "Evaluations stopped by a stage",
    ["stage", "result"],
)

# Track totals for computing rates
_approved_count = 0
_total_count = 0


# =============================================================================
# Technical Metrics
# =============================================================================

evaluation_latency = Histogram(
    "seap_evaluation_latency_seconds",
    "End-to-end evaluation latency in seconds",
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)

bureau_request_latency = Histogram(
    "seap_bureau_request_latency_seconds",
    "Credit bureau attempt latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0],
)

bureau_requests_total = Counter(
    "seap_bureau_requests_total",
    "Total number of credit bureau queries",
    ["mode", "status"],  # live/simulated, success/failure
)

bureau_failures = Counter(
    "seap_bureau_failures_total",
    "Total number of failed credit bureau attempts",
    ["error_type"],  # timeout, http_error, unknown, cancelled
)

bureau_retries = Counter(
    "seap_bureau_retry_total",
    "Total number of credit bureau retries",
)

http_requests_total = Counter(
    "seap_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "seap_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_evaluation(result: str, max_amount: int | None) -> None:
    """Record an evaluation outcome in metrics."""
    global _approved_count, _total_count

    evaluation_total.labels(result=result).inc()

    _total_count += 1
    if result == "approved":
        _approved_count += 1
        approved_amount_bucket.labels(bucket=_get_amount_bucket(max_amount or 0)).inc()

    approval_rate_gauge.set(_approved_count / _total_count)


def record_stage_rejection(stage: str, result: str) -> None:
    """Record the stage that stopped an evaluation."""
    stage_rejections.labels(stage=stage, result=result).inc()


def _get_amount_bucket(amount: int) -> str:
    """Map an approved amount to a bucket label."""
    if amount <= 0:
        return "0"
    elif amount <= 100_000:
        return "0-100k"
    elif amount <= 150_000:
        return "100k-150k"
    else:
        return "150k-200k"


@contextmanager
def track_evaluation_latency() -> Generator[None, None, None]:
    """Context manager to track evaluation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        evaluation_latency.observe(time.perf_counter() - start)


@contextmanager
def track_bureau_latency() -> Generator[None, None, None]:
    """Context manager to track one bureau attempt."""
    start = time.perf_counter()
    try:
        yield
    finally:
        bureau_request_latency.observe(time.perf_counter() - start)


def record_bureau_success(mode: str) -> None:
    """Record a successful bureau query."""
    bureau_requests_total.labels(mode=mode, status="success").inc()


def record_bureau_failure(mode: str) -> None:
    """Record a bureau query that failed after all attempts."""
    bureau_requests_total.labels(mode=mode, status="failure").inc()


def record_bureau_attempt_failure(error_type: str) -> None:
    """Record a single failed bureau attempt."""
    bureau_failures.labels(error_type=error_type).inc()


def record_bureau_retry() -> None:
    """Record a bureau retry."""
    bureau_retries.inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST

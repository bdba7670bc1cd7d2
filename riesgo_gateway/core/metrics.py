"""Prometheus metrics for the Riesgo Gateway service.

Metrics are organized into two categories:

Business Metrics (for Risk/Credit):
- riesgo_tier_total: Classifications by risk tier
- riesgo_medium_verdict_total: Medium-risk verdicts by status
- riesgo_situacion5_total: Situación 5 outcomes (offer, not_applicable)
- riesgo_situacion5_amount_pesos: Offered Situación 5 amounts

Technical Metrics (for Engineering/SRE):
- riesgo_consulta_latency_seconds: End-to-end report query latency
- riesgo_bureau_fetch_latency_seconds: Bureau API latency
- riesgo_bureau_fetch_total: Bureau API requests by status
- riesgo_bureau_fetch_failures_total: Bureau API failures by type
- riesgo_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator, Optional

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Risk/Credit dashboards)
# =============================================================================

risk_tier_total = Counter(
    "riesgo_tier_total",
    "Total number of reports classified, by risk tier",
    ["tier"],  # ALTO, MEDIO, BAJO
)

medium_verdict_total = Counter(
    "riesgo_medium_verdict_total",
    "Total number of medium-risk verdicts",
    ["estado"],  # APROBADO, REVISION, RECHAZADO
)

situacion5_total = Counter(
    "riesgo_situacion5_total",
    "Situación 5 evaluations by outcome",
    ["outcome"],  # offer, not_applicable
)

situacion5_amount = Histogram(
    "riesgo_situacion5_amount_pesos",
    "Situación 5 offered amounts in pesos",
    buckets=[300_000, 500_000, 750_000, 1_000_000, 1_500_000, 2_000_000],
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

consulta_latency = Histogram(
    "riesgo_consulta_latency_seconds",
    "Report query latency in seconds (bureau fetch plus analysis)",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

bureau_fetch_latency = Histogram(
    "riesgo_bureau_fetch_latency_seconds",
    "Bureau API fetch latency in seconds",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

bureau_fetch_failures = Counter(
    "riesgo_bureau_fetch_failures_total",
    "Total number of bureau API failures",
    ["error_type"],  # timeout, error, no_report, not_configured
)

bureau_fetch_total = Counter(
    "riesgo_bureau_fetch_total",
    "Total number of bureau API requests",
    ["status"],  # success, failure
)

http_requests_total = Counter(
    "riesgo_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "riesgo_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_analysis(
    tier: str,
    medium_status: Optional[str] = None,
    situacion5_monto: Optional[int] = None,
) -> None:
    """Record the outcome of a report analysis."""
    risk_tier_total.labels(tier=tier).inc()

    if medium_status is not None:
        medium_verdict_total.labels(estado=medium_status).inc()

    if situacion5_monto is None:
        situacion5_total.labels(outcome="not_applicable").inc()
    else:
        situacion5_total.labels(outcome="offer").inc()
        situacion5_amount.observe(situacion5_monto)


@contextmanager
def track_consulta_latency() -> Generator[None, None, None]:
    """Context manager to track report query latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        consulta_latency.observe(duration)


@contextmanager
def track_bureau_fetch_latency() -> Generator[None, None, None]:
    """Context manager to track bureau API fetch latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        bureau_fetch_latency.observe(duration)


def record_bureau_fetch_success() -> None:
    """Record a successful bureau API fetch."""
    bureau_fetch_total.labels(status="success").inc()


def record_bureau_fetch_failure(error_type: str) -> None:
    """Record a bureau API fetch failure."""
    bureau_fetch_total.labels(status="failure").inc()
    bureau_fetch_failures.labels(error_type=error_type).inc()


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

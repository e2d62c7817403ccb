"""Prometheus metrics for the ERP Finance Gateway service.

Metrics are organized into two categories:

Business Metrics (for Finance/Operations):
- erp_finance_plans_generated_total: Installment plans computed by source
- erp_finance_installments_written_total: Receivable installments written
- erp_finance_advances_written_total: Payroll advances written
- erp_finance_amount_written_cents_total: Money written to the ledger by kind

Technical Metrics (for Engineering/SRE):
- erp_finance_generation_latency_seconds: Generation request latency
- erp_finance_store_latency_seconds: Entity store call latency
- erp_finance_store_failures_total: Entity store failures
- erp_finance_ledger_write_failures_total: Ledger writes stopped part way
- erp_finance_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Finance/Operations dashboards)
# =============================================================================

plans_generated = Counter(
    "erp_finance_plans_generated_total",
    "Total number of installment plans computed",
    ["source"],  # work_order, simulation
)

installments_written = Counter(
    "erp_finance_installments_written_total",
    "Total number of receivable installments written to the store",
)

advances_written = Counter(
    "erp_finance_advances_written_total",
    "Total number of payroll advances written to the store",
)

amount_written_cents = Counter(
    "erp_finance_amount_written_cents_total",
    "Total amount written to the ledger in cents",
    ["kind"],  # receivable, advance
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

generation_latency = Histogram(
    "erp_finance_generation_latency_seconds",
    "Ledger generation request latency in seconds",
    ["flow"],  # work_order, advance_batch
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

store_latency = Histogram(
    "erp_finance_store_latency_seconds",
    "Entity store call latency in seconds",
    ["operation"],  # create, update, get, list, filter
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

store_failures = Counter(
    "erp_finance_store_failures_total",
    "Total number of entity store failures",
    ["operation", "error_type"],  # timeout, error
)

store_requests_total = Counter(
    "erp_finance_store_requests_total",
    "Total number of entity store requests",
    ["operation", "status"],  # success, failure
)

ledger_write_failures = Counter(
    "erp_finance_ledger_write_failures_total",
    "Total number of ledger writes that stopped part way",
    ["stage"],  # parent, child, source_update
)

http_requests_total = Counter(
    "erp_finance_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "erp_finance_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_plan_generated(source: str) -> None:
    """Record a computed installment plan."""
    plans_generated.labels(source=source).inc()


def record_installments_written(count: int, total_cents: int) -> None:
    """Record receivable installments written to the store."""
    installments_written.inc(count)
    amount_written_cents.labels(kind="receivable").inc(total_cents)


def record_advances_written(count: int, total_cents: int) -> None:
    """Record payroll advances written to the store."""
    advances_written.inc(count)
    amount_written_cents.labels(kind="advance").inc(total_cents)


def record_ledger_write_failure(stage: str) -> None:
    """Record a ledger write that stopped part way."""
    ledger_write_failures.labels(stage=stage).inc()


@contextmanager
def track_generation_latency(flow: str) -> Generator[None, None, None]:
    """Context manager to track generation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        generation_latency.labels(flow=flow).observe(duration)


@contextmanager
def track_store_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track entity store call latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        store_latency.labels(operation=operation).observe(duration)


def record_store_success(operation: str) -> None:
    """Record a successful entity store call."""
    store_requests_total.labels(operation=operation, status="success").inc()


def record_store_failure(operation: str, error_type: str) -> None:
    """Record an entity store failure."""
    store_requests_total.labels(operation=operation, status="failure").inc()
    store_failures.labels(operation=operation, error_type=error_type).inc()


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

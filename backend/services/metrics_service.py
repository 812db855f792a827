# backend/services/metrics_service.py
import logging
import re
import time
from typing import Dict

from fastapi import Request, Response
from prometheus_client import Counter, Gauge, Histogram, generate_latest

logger = logging.getLogger(__name__)

# Define Prometheus metrics
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status_code"]
)

HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
)

REPORTS_SUBMITTED_TOTAL = Counter(
    "atm_reports_submitted_total",
    "Total ATM status reports submitted",
    ["status"],
)

REPORT_OPERATIONS_TOTAL = Counter(
    "atm_report_operations_total",
    "Report store operations",
    ["operation", "result"],
)

ATM_STATUS_COUNT = Gauge(
    "atm_status_count", "Number of today's reports by ATM status", ["status"]
)

SLA_BREACHES_ACTIVE = Gauge(
    "atm_sla_breaches", "SLA breaches in the latest dashboard summary", ["severity"]
)

_REPORT_ID_PATH = re.compile(r"^(?P<prefix>.*/reports)/\d+$")


class MetricsService:
    """Service for collecting and exposing Prometheus metrics"""

    def __init__(self):
        self.start_time = time.time()

    async def record_http_request(
        self, request: Request, response: Response, process_time: float
    ):
        """Record HTTP request metrics"""
        endpoint = self._get_endpoint_name(request.url.path)
        HTTP_REQUESTS_TOTAL.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()

        HTTP_REQUEST_DURATION.labels(method=request.method, endpoint=endpoint).observe(
            process_time
        )

    def record_report_submitted(self, status: str):
        REPORTS_SUBMITTED_TOTAL.labels(status=status).inc()

    def record_report_operation(self, operation: str, result: str):
        """Record a create/update/delete outcome (ok, missing, error)"""
        REPORT_OPERATIONS_TOTAL.labels(operation=operation, result=result).inc()

    def update_atm_status_counts(self, status_counts: Dict[str, int]):
        """Update ATM status gauge metrics"""
        for status, count in status_counts.items():
            ATM_STATUS_COUNT.labels(status=status).set(count)

    def update_sla_breaches(self, severity_counts: Dict[str, int]):
        for severity, count in severity_counts.items():
            SLA_BREACHES_ACTIVE.labels(severity=severity).set(count)

    def _get_endpoint_name(self, path: str) -> str:
        """Normalize endpoint paths for metrics"""
        match = _REPORT_ID_PATH.match(path)
        if match:
            return f"{match.group('prefix')}/{{report_id}}"
        return path

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format"""
        return generate_latest()

    def get_uptime_seconds(self) -> float:
        return time.time() - self.start_time


# Global metrics service instance
metrics_service = MetricsService()


# Middleware for automatic metrics collection
async def metrics_middleware(request: Request, call_next):
    """Middleware to automatically collect HTTP metrics"""
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    await metrics_service.record_http_request(request, response, process_time)

    return response

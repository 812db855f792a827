from .auth_service import AuthService, auth_service
from .dashboard_service import DashboardService, dashboard_service
from .export_service import ExportService, export_service
from .metrics_service import MetricsService, metrics_service
from .report_service import ReportService, report_service

__all__ = [
    "AuthService",
    "DashboardService",
    "ExportService",
    "MetricsService",
    "ReportService",
    "auth_service",
    "dashboard_service",
    "export_service",
    "metrics_service",
    "report_service",
]

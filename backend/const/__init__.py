from .reporting import (
    DASHBOARD_XLSX_COLUMNS,
    FAULT_CATEGORIES,
    HEAT_WEIGHTS,
    PDF_MAX_BREACHES,
    REPORT_CSV_COLUMNS,
    REPORT_XLSX_COLUMNS,
    SEVERITY_TIERS,
)

__all__ = [
    "FAULT_CATEGORIES",
    "SEVERITY_TIERS",
    "HEAT_WEIGHTS",
    "REPORT_CSV_COLUMNS",
    "REPORT_XLSX_COLUMNS",
    "DASHBOARD_XLSX_COLUMNS",
    "PDF_MAX_BREACHES",
]

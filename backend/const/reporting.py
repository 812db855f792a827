from typing import Dict, List, Tuple

# Dashboard fault categories, keyed by normalized downtime reason
FAULT_CATEGORIES: Dict[str, str] = {
    "LOST_COMM": "Lost Communication",
    "CASH_OUT": "Cash Out",
    "HARD_FAULT": "Hardware / Hard Fault",
    "IN_REPLENISHMENT": "In Replenishment",
    "APP_OUT_OF_SERVICE": "Application Out of Service",
    "SWITCH_LOST_COMM": "Switch / Host Lost Communication",
}

# (minimum downtime minutes, severity), checked in order
SEVERITY_TIERS: List[Tuple[int, str]] = [
    (120, "HIGH"),
    (60, "MEDIUM"),
    (0, "LOW"),
]

# Branch heat score weights
HEAT_WEIGHTS: Dict[str, int] = {
    "slaBreaches": 5,
    "down": 3,
    "faults": 1,
}

# (header, report attribute) pairs for each export
REPORT_CSV_COLUMNS: List[Tuple[str, str]] = [
    ("Branch Name", "branch_name"),
    ("ATM ID", "atm_id"),
    ("ATM Status", "atm_status"),
    ("Downtime Start", "downtime_start"),
    ("Downtime End", "downtime_end"),
    ("Downtime Duration (hrs)", "downtime_duration_hours"),
    ("Reason for Downtime", "reason_for_downtime"),
    ("Expected Restoration Time", "expected_restoration_time"),
    ("Follow-Up Status", "follow_up_status"),
    ("Performance Score", "performance_score"),
]

REPORT_XLSX_COLUMNS: List[Tuple[str, str, int]] = [
    ("Branch Name", "branch_name", 25),
    ("ATM ID", "atm_id", 15),
    ("ATM Status", "atm_status", 12),
    ("Reason", "reason_for_downtime", 30),
    ("Report Date", "report_date", 14),
    ("Window", "reporting_window", 14),
    ("Created At", "created_at", 20),
]

DASHBOARD_XLSX_COLUMNS: List[Tuple[str, str, int]] = [
    ("Branch", "branch_name", 25),
    ("ATM ID", "atm_id", 15),
    ("Status", "atm_status", 12),
    ("Downtime Start", "downtime_start", 20),
    ("Downtime End", "downtime_end", 20),
    ("Duration (hrs)", "downtime_duration_hours", 14),
    ("Reason", "reason_for_downtime", 30),
    ("Report Date", "report_date", 14),
    ("Window", "reporting_window", 14),
]

# Breach rows rendered into the dashboard PDF
PDF_MAX_BREACHES = 50

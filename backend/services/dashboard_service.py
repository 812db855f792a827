import logging
from collections import Counter
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from config import settings
from const import FAULT_CATEGORIES, SEVERITY_TIERS
from models import Report, ReportStatus
from services.metrics_service import metrics_service
from services.report_service import report_service
from sqlalchemy.orm import Session
from utils.report_utils import (
    heat_score,
    minutes_between,
    normalize_reason,
    severity_for,
)

logger = logging.getLogger(__name__)


class DashboardService:
    """Aggregates today's reports into the dashboard summary payload"""

    def __init__(
        self,
        sla_threshold_minutes: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if sla_threshold_minutes is None:
            sla_threshold_minutes = settings.sla_threshold_minutes
        self.sla_threshold_minutes = sla_threshold_minutes
        self.clock = clock

    def get_summary(self, db: Session) -> Dict[str, Any]:
        """Scan today's reports and build the summary"""
        now = self.clock()
        reports = report_service.list_reports_for_date(db, now.date())
        summary = self.build_summary(reports, now)

        metrics_service.update_atm_status_counts(summary["atmStatus"])
        severities = Counter(b["severity"] for b in summary["sla"]["breaches"])
        metrics_service.update_sla_breaches(
            {severity: severities.get(severity, 0) for _, severity in SEVERITY_TIERS}
        )

        logger.debug(
            f"Dashboard summary: {len(reports)} reports, "
            f"{len(summary['sla']['breaches'])} SLA breaches"
        )
        return summary

    def build_summary(
        self, reports: Iterable[Report], now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        now = now or self.clock()
        reports = list(reports)

        breaches = self._calculate_breaches(reports, now)

        return {
            "atmStatus": self._count_statuses(reports),
            "faults": self._count_faults(reports),
            "sla": {
                "thresholdMinutes": self.sla_threshold_minutes,
                "breaches": breaches,
            },
            "branches": self._calculate_branches(reports, breaches),
            "generatedAt": now,
        }

    def _count_statuses(self, reports: List[Report]) -> Dict[str, int]:
        counts = Counter(r.atm_status for r in reports)
        return {status.value: counts.get(status.value, 0) for status in ReportStatus}

    def _count_faults(self, reports: List[Report]) -> Dict[str, int]:
        """DOWN reports per fault category; unrecognized reasons are not counted"""
        faults = {key: 0 for key in FAULT_CATEGORIES}
        for report in reports:
            if report.atm_status != ReportStatus.DOWN.value:
                continue
            key = normalize_reason(report.reason_for_downtime)
            if key in faults:
                faults[key] += 1
        return faults

    def _calculate_breaches(
        self, reports: List[Report], now: datetime
    ) -> List[Dict[str, Any]]:
        breaches = []
        for report in reports:
            if report.atm_status != ReportStatus.DOWN.value:
                continue
            if report.downtime_start is None:
                continue

            minutes = minutes_between(report.downtime_start, report.downtime_end, now)
            if not minutes or minutes <= self.sla_threshold_minutes:
                continue

            breaches.append(
                {
                    "atmId": report.atm_id,
                    "branch": report.branch_name,
                    "issue": report.reason_for_downtime,
                    "downMinutes": minutes,
                    "since": report.downtime_start,
                    "severity": severity_for(minutes),
                }
            )
        return breaches

    def _calculate_branches(
        self, reports: List[Report], breaches: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """Heat-map entries, one per branch that reported today"""
        breach_counts = Counter(b["branch"] for b in breaches)
        branches: Dict[str, Counter] = {}
        for report in reports:
            branches.setdefault(report.branch_name, Counter())[report.atm_status] += 1

        entries = []
        for branch in sorted(branches):
            counts = branches[branch]
            down = counts[ReportStatus.DOWN.value]
            # Faults mirror the DOWN count on the heat map
            faults = down
            sla_breaches = breach_counts.get(branch, 0)
            entries.append(
                {
                    "branch": branch,
                    "up": counts[ReportStatus.UP.value],
                    "down": down,
                    "parked": counts[ReportStatus.PARKED.value],
                    "faults": faults,
                    "slaBreaches": sla_breaches,
                    "heatScore": heat_score(sla_breaches, down, faults),
                }
            )
        return entries


dashboard_service = DashboardService()

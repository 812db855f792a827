import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from fastapi import HTTPException
from models import Report, ReportStatus
from schemas.auth import TokenData
from schemas.report import ReportCreate, ReportUpdate
from services.metrics_service import metrics_service
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from utils.report_utils import calc_downtime_hours, compute_window, to_local_naive

logger = logging.getLogger(__name__)


def store_error_message(exc: SQLAlchemyError) -> str:
    """Underlying driver message for a failed statement"""
    return str(getattr(exc, "orig", None) or exc)


class ReportService:
    """Report lifecycle against the report store"""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def create_report(
        self, db: Session, data: ReportCreate, current_user: TokenData
    ) -> Report:
        """Insert a report, deriving duration and stamping date and window"""
        now = self.clock()
        is_down = data.atm_status == ReportStatus.DOWN

        start = to_local_naive(data.downtime_start) if is_down else None
        end = to_local_naive(data.downtime_end) if is_down else None

        report = Report(
            branch_name=data.branch_name,
            atm_id=data.atm_id,
            atm_status=data.atm_status.value,
            downtime_start=start,
            downtime_end=end,
            downtime_duration_hours=calc_downtime_hours(start, end),
            reason_for_downtime=data.reason_for_downtime,
            expected_restoration_time=to_local_naive(data.expected_restoration_time),
            follow_up_status=data.follow_up_status,
            performance_score=data.performance_score,
            report_date=now.date(),
            reporting_window=compute_window(now),
            created_by=current_user.id,
            created_at=now,
        )

        try:
            db.add(report)
            db.commit()
            db.refresh(report)
        except SQLAlchemyError as e:
            db.rollback()
            metrics_service.record_report_operation("create", "error")
            logger.error(f"Save report error: {store_error_message(e)}")
            raise HTTPException(status_code=500, detail=store_error_message(e))

        metrics_service.record_report_operation("create", "ok")
        metrics_service.record_report_submitted(report.atm_status)
        logger.info(
            f"Report {report.id} saved: {report.atm_id} @ {report.branch_name} "
            f"{report.atm_status} ({report.reporting_window}) by {current_user.username}"
        )
        return report

    def list_reports(self, db: Session) -> List[Report]:
        """All reports, newest report date and window first"""
        return (
            db.query(Report)
            .order_by(Report.report_date.desc(), Report.reporting_window.desc())
            .all()
        )

    def list_reports_for_date(self, db: Session, report_date: date) -> List[Report]:
        return db.query(Report).filter(Report.report_date == report_date).all()

    def list_reports_by_creation(self, db: Session) -> List[Report]:
        return db.query(Report).order_by(Report.created_at.desc()).all()

    def update_report(self, db: Session, report_id: int, data: ReportUpdate) -> None:
        """
        Replace branch, ATM, status and reason of a report.
        Downtime timestamps, duration and window are left as they are.
        """
        try:
            existing: Optional[Report] = db.get(Report, report_id)
            if existing is None:
                logger.warning(f"Update of unknown report {report_id} ignored")
                metrics_service.record_report_operation("update", "missing")
                return

            crosses_down = (existing.atm_status == ReportStatus.DOWN.value) != (
                data.atm_status == ReportStatus.DOWN
            )
            if crosses_down:
                logger.warning(
                    f"Report {report_id} status {existing.atm_status} -> "
                    f"{data.atm_status.value}; downtime duration not recomputed"
                )

            existing.branch_name = data.branch_name
            existing.atm_id = data.atm_id
            existing.atm_status = data.atm_status.value
            existing.reason_for_downtime = data.reason_for_downtime
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            metrics_service.record_report_operation("update", "error")
            logger.error(f"Update report error: {store_error_message(e)}")
            raise HTTPException(status_code=500, detail=store_error_message(e))

        metrics_service.record_report_operation("update", "ok")
        logger.info(f"Report {report_id} updated")

    def delete_report(self, db: Session, report_id: int) -> None:
        """Remove a report by id; unknown ids are not an error"""
        try:
            deleted = db.query(Report).filter(Report.id == report_id).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            metrics_service.record_report_operation("delete", "error")
            logger.error(f"Delete report error: {store_error_message(e)}")
            raise HTTPException(status_code=500, detail=store_error_message(e))

        if deleted:
            metrics_service.record_report_operation("delete", "ok")
            logger.info(f"Report {report_id} deleted")
        else:
            metrics_service.record_report_operation("delete", "missing")
            logger.warning(f"Delete of unknown report {report_id} ignored")


report_service = ReportService()

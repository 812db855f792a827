import logging

from database import get_db
from dependencies.auth import get_current_user
from fastapi import APIRouter, Depends, HTTPException, Response
from schemas import DashboardSummary, ErrorResponse
from services.dashboard_service import dashboard_service
from services.export_service import (
    PDF_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    attachment_headers,
    dated_filename,
    export_service,
)
from services.report_service import report_service
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)
router = APIRouter(
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.get("/dashboard/summary", response_model=DashboardSummary)
async def get_dashboard_summary(db: Session = Depends(get_db)):
    """Today's status counts, fault categories, SLA breaches and branch heat"""
    try:
        return dashboard_service.get_summary(db)
    except Exception as e:
        logger.error(f"Dashboard error: {str(e)}")
        raise HTTPException(status_code=500, detail="Dashboard load failed")


@router.get("/dashboard/export/xlsx")
async def export_dashboard_xlsx(db: Session = Depends(get_db)):
    try:
        reports = report_service.list_reports(db)
        summary = dashboard_service.get_summary(db)
        content = export_service.dashboard_to_xlsx(reports, summary)
    except Exception as e:
        logger.error(f"Dashboard Excel export error: {str(e)}")
        raise HTTPException(status_code=500, detail="Dashboard Excel export failed")

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers=attachment_headers("ATM_Dashboard.xlsx"),
    )


@router.get("/dashboard/export/pdf")
async def export_dashboard_pdf(db: Session = Depends(get_db)):
    try:
        summary = dashboard_service.get_summary(db)
        content = export_service.dashboard_to_pdf(summary)
    except Exception as e:
        logger.error(f"Dashboard PDF export error: {str(e)}")
        raise HTTPException(status_code=500, detail="Dashboard PDF export failed")

    return Response(
        content=content,
        media_type=PDF_MEDIA_TYPE,
        headers=attachment_headers(
            dated_filename("ATM_Dashboard", "pdf", summary["generatedAt"].date())
        ),
    )

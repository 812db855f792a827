import logging
from typing import List

from database import get_db
from dependencies.auth import get_current_user
from fastapi import APIRouter, Depends, HTTPException, Response
from schemas.auth import TokenData
from schemas.common import ErrorResponse, OkResponse
from schemas.report import ReportCreate, ReportResponse, ReportUpdate
from services.export_service import (
    CSV_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    attachment_headers,
    export_service,
)
from services.report_service import report_service, store_error_message
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)
router = APIRouter(
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

REPORT_EXPORT_NAME = "CBE_ATM_Report"


@router.post("/reports", response_model=OkResponse)
async def create_report(
    report_data: ReportCreate,
    current_user: TokenData = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Submit an ATM status report"""
    report_service.create_report(db, report_data, current_user)
    return OkResponse()


@router.get("/reports", response_model=List[ReportResponse])
async def get_reports(db: Session = Depends(get_db)):
    """All reports, newest date and window first"""
    try:
        reports = report_service.list_reports(db)
    except SQLAlchemyError as e:
        logger.error(f"Error listing reports: {store_error_message(e)}")
        raise HTTPException(status_code=500, detail=store_error_message(e))
    return [ReportResponse.model_validate(r) for r in reports]


@router.get("/reports/export/csv")
async def export_reports_csv(db: Session = Depends(get_db)):
    try:
        reports = report_service.list_reports(db)
    except SQLAlchemyError as e:
        logger.error(f"CSV export error: {store_error_message(e)}")
        raise HTTPException(status_code=500, detail=store_error_message(e))

    return Response(
        content=export_service.reports_to_csv(reports),
        media_type=CSV_MEDIA_TYPE,
        headers=attachment_headers(f"{REPORT_EXPORT_NAME}.csv"),
    )


@router.get("/reports/export/xlsx")
async def export_reports_xlsx(db: Session = Depends(get_db)):
    try:
        reports = report_service.list_reports_by_creation(db)
    except SQLAlchemyError as e:
        logger.error(f"Excel export error: {store_error_message(e)}")
        raise HTTPException(status_code=500, detail=store_error_message(e))

    return Response(
        content=export_service.reports_to_xlsx(reports),
        media_type=XLSX_MEDIA_TYPE,
        headers=attachment_headers(f"{REPORT_EXPORT_NAME}.xlsx"),
    )


@router.put("/reports/{report_id}", response_model=OkResponse)
async def update_report(
    report_id: int, report_data: ReportUpdate, db: Session = Depends(get_db)
):
    """Replace branch, ATM, status and reason of a report"""
    report_service.update_report(db, report_id, report_data)
    return OkResponse()


@router.delete("/reports/{report_id}", response_model=OkResponse)
async def delete_report(report_id: int, db: Session = Depends(get_db)):
    report_service.delete_report(db, report_id)
    return OkResponse()

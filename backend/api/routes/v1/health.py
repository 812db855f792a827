import logging
from datetime import datetime

from config import settings
from database import get_db
from fastapi import APIRouter, Depends
from services.metrics_service import metrics_service
from sqlalchemy import text
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Liveness plus report store connectivity"""
    health_status = {
        "status": "OK",
        "timestamp": datetime.now().isoformat(),
        "environment": settings.env,
        "version": settings.api_version,
        "uptime_seconds": round(metrics_service.get_uptime_seconds(), 1),
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["database"] = "connected"
    except Exception as e:
        logger.error(f"Health check database error: {str(e)}")
        health_status["database"] = f"error: {str(e)}"
        health_status["status"] = "unhealthy"

    return health_status

from typing import Dict, Any

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from ...dependencies import get_db, get_verification_service
from ....config import get_settings
from ....services.verification_service import VerificationService
from ..schemas import ServiceStatusResponse

logger = structlog.get_logger(__name__)

router = APIRouter()
status_router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "service": "Fact-Check API",
        "version": "0.1.0",
        "environment": get_settings().environment,
    }


@status_router.get("/services/status", response_model=ServiceStatusResponse)
async def services_status(
    db: Session = Depends(get_db),
    verification_service: VerificationService = Depends(get_verification_service)
):
    try:
        db.execute(text("SELECT 1"))
        database_status = {"status": "connected", "message": "Database connection established"}
    except Exception as e:
        logger.error("Database status check failed", error=str(e))
        database_status = {"status": "disconnected", "message": "Database connectivity failed"}

    return ServiceStatusResponse(
        openai=verification_service.get_service_status(),
        database=database_status
    )

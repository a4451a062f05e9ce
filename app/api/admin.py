# app/api/admin.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.admin import AdminStats, RepairResponse
from app.services.admin_stats import collect_stats
from app.services.onboarding_service import repair_onboarding_flags

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/stats", response_model=AdminStats)
def get_stats(db: Session = Depends(get_db)):
    logger.info("📥 GET /api/admin/stats")
    return collect_stats(db)


@router.post("/repair-onboarding-flags", response_model=RepairResponse)
def repair_flags(db: Session = Depends(get_db)):
    """Flag every profile with saved answers as onboarded."""
    logger.info("📥 POST /api/admin/repair-onboarding-flags")
    repaired = repair_onboarding_flags(db)
    return RepairResponse(message=f"Repaired {repaired} profile(s)", repaired=repaired)

# app/api/onboarding.py
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ApiError
from app.models.onboarding import OnboardingSubmission, OnboardingSubmitResponse
from app.services.onboarding_service import submit_onboarding

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/onboarding", tags=["Onboarding"])


@router.post("", response_model=OnboardingSubmitResponse)
def save_onboarding(payload: OnboardingSubmission, db: Session = Depends(get_db)):
    """Submit (or resubmit) the onboarding questionnaire for an existing profile."""
    logger.info(f"📥 POST /api/onboarding - email: {payload.email}")
    try:
        submit_onboarding(db, payload.email, payload.answers())
    except ApiError as e:
        if e.status_code >= 500:
            e.extra.setdefault("success", False)
        raise

    return OnboardingSubmitResponse(message="Onboarding saved successfully", success=True)

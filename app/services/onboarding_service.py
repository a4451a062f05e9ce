# app/services/onboarding_service.py
"""
Onboarding questionnaire reconciliation.

submit_onboarding() resolves the profile by email, replaces (or inserts) its
answers and flips `onboarding_completed`. The answer write and the flag write
share one commit. repair_onboarding_flags() fixes profiles left with saved
answers but an unset flag (rows written before the two writes were combined,
or edited by hand).
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from app.core.database import store_guard
from app.core.exceptions import NotFound, require_email
from app.db.models import OnboardingResponse, UserProfile
from app.models.onboarding import OnboardingAnswers

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found. Please sign in first."


class OnboardingResult:
    def __init__(self, success: bool, created: bool):
        self.success = success
        self.created = created


def submit_onboarding(
    db: Session,
    email: Optional[str],
    answers: Optional[OnboardingAnswers] = None,
) -> OnboardingResult:
    email = require_email(email)
    answers = answers or OnboardingAnswers()

    with store_guard(db, "Failed to save onboarding response"):
        # 1) resolve the owning profile; onboarding never creates one
        user_id = db.query(UserProfile.id).filter(UserProfile.email == email).scalar()
        if user_id is None:
            logger.info(f"⚠️ User not found for onboarding: {email}")
            raise NotFound(USER_NOT_FOUND)

        # 2) full overwrite of existing answers, else insert
        values = answers.storage_values()
        existing = (
            db.query(OnboardingResponse.id)
            .filter(OnboardingResponse.user_id == user_id)
            .first()
        )
        if existing is not None:
            logger.info("🔄 Updating existing onboarding")
            db.query(OnboardingResponse).filter(
                OnboardingResponse.user_id == user_id
            ).update(values, synchronize_session=False)
        else:
            logger.info("➕ Creating new onboarding")
            db.add(OnboardingResponse(user_id=user_id, **values))

        # 3) mark onboarding as completed
        db.query(UserProfile).filter(UserProfile.id == user_id).update(
            {UserProfile.onboarding_completed: True, UserProfile.updated_at: func.now()},
            synchronize_session=False,
        )
        db.commit()

    logger.info("✅ Onboarding saved successfully")
    return OnboardingResult(success=True, created=existing is None)


def set_onboarding_status(db: Session, email: Optional[str], completed: bool) -> None:
    email = require_email(email)

    with store_guard(db, "Failed to update status"):
        updated = db.query(UserProfile).filter(UserProfile.email == email).update(
            {UserProfile.onboarding_completed: bool(completed), UserProfile.updated_at: func.now()},
            synchronize_session=False,
        )
        if not updated:
            db.rollback()
            raise NotFound("User not found")
        db.commit()

    logger.info(f"✅ Onboarding status for {email} set to {bool(completed)}")


def repair_onboarding_flags(db: Session) -> int:
    """Set the completion flag on every profile that already has answers."""
    with store_guard(db, "Failed to repair onboarding flags"):
        answered = select(OnboardingResponse.user_id)
        repaired = (
            db.query(UserProfile)
            .filter(
                UserProfile.onboarding_completed.is_(False),
                UserProfile.id.in_(answered),
            )
            .update(
                {UserProfile.onboarding_completed: True, UserProfile.updated_at: func.now()},
                synchronize_session=False,
            )
        )
        db.commit()

    if repaired:
        logger.warning(f"🛠️ Repaired onboarding flag on {repaired} profile(s)")
    else:
        logger.info("✅ No onboarding flags needed repair")
    return repaired

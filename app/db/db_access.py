# app/db/db_access.py

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.database import store_guard
from app.core.exceptions import NotFound, ValidationError, require_email
from .models import OnboardingResponse, UserProfile

logger = logging.getLogger(__name__)

ProfileRow = Tuple[UserProfile, Optional[OnboardingResponse]]


# ------------------------------------------------------------------
# READ PATHS
# ------------------------------------------------------------------

def _onboarding_for(db: Session, user_id: str) -> Optional[OnboardingResponse]:
    return (
        db.query(OnboardingResponse)
        .filter(OnboardingResponse.user_id == user_id)
        .order_by(OnboardingResponse.created_at, OnboardingResponse.id)
        .first()
    )


def find_profile(
    db: Session,
    email: Optional[str] = None,
    firebase_uid: Optional[str] = None,
) -> Optional[ProfileRow]:
    """
    Look a profile up by email or firebase_uid.
    An email match always wins; firebase_uid is only consulted when no
    profile has the given email.
    """
    if not email and not firebase_uid:
        raise ValidationError("Email or firebase_uid required")

    with store_guard(db, "Failed to fetch profile"):
        profile = None
        if email:
            profile = db.query(UserProfile).filter(UserProfile.email == email).first()
        if profile is None and firebase_uid:
            profile = (
                db.query(UserProfile)
                .filter(UserProfile.firebase_uid == firebase_uid)
                .order_by(UserProfile.created_at, UserProfile.id)
                .first()
            )
        if profile is None:
            return None
        return profile, _onboarding_for(db, profile.id)


def list_profiles(db: Session) -> List[ProfileRow]:
    """All profiles joined with their answers, newest first."""
    with store_guard(db, "Failed to fetch users"):
        rows = (
            db.query(UserProfile, OnboardingResponse)
            .outerjoin(OnboardingResponse, OnboardingResponse.user_id == UserProfile.id)
            .order_by(UserProfile.created_at.desc())
            .all()
        )
    logger.info(f"✅ Retrieved {len(rows)} users")
    return [(profile, onboarding) for profile, onboarding in rows]


# ------------------------------------------------------------------
# ADMIN DELETE
# ------------------------------------------------------------------

def delete_profile(db: Session, email: Optional[str]) -> str:
    """Delete a profile and its onboarding answers; returns the deleted id."""
    email = require_email(email)

    with store_guard(db, "Failed to delete profile"):
        profile = db.query(UserProfile).filter(UserProfile.email == email).first()
        if profile is None:
            raise NotFound("User not found")

        profile_id = profile.id
        # dependent rows go first
        removed = (
            db.query(OnboardingResponse)
            .filter(OnboardingResponse.user_id == profile_id)
            .delete(synchronize_session=False)
        )
        db.query(UserProfile).filter(UserProfile.id == profile_id).delete(synchronize_session=False)
        db.commit()

    logger.info(f"🗑️ Deleted profile {email} ({removed} onboarding row(s))")
    return profile_id

# app/services/profile_service.py
"""
Create-or-update of a user's profile, keyed by email.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from app.core.database import store_guard
from app.core.exceptions import require_email
from app.db.models import UserProfile

logger = logging.getLogger(__name__)


class ProfileUpsertResult:
    def __init__(self, id: str, created: bool):
        self.id = id
        self.created = created

    def __repr__(self) -> str:
        return f"ProfileUpsertResult(id={self.id!r}, created={self.created})"




def upsert_profile(
    db: Session,
    email: Optional[str],
    firebase_uid: Optional[str] = None,
    full_name: Optional[str] = None,
    gender: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> ProfileUpsertResult:
    """
    Insert a profile for a never-seen email, otherwise overwrite its mutable
    fields (last write wins, nulls included).
    Lookup is by exact email only; firebase_uid is never used to match here.
    """
    email = require_email(email)

    with store_guard(db, "Failed to save profile"):
        profile = db.query(UserProfile).filter(UserProfile.email == email).first()

        if profile is not None:
            logger.info(f"🔄 Updating existing user {email}")
            profile_id = profile.id
            profile.firebase_uid = firebase_uid
            profile.full_name = full_name
            profile.gender = gender
            profile.avatar_url = avatar_url
            profile.updated_at = func.now()
            db.commit()
            logger.info("✅ User profile updated")
            return ProfileUpsertResult(profile_id, created=False)

        logger.info(f"➕ Creating new user {email}")
        profile = UserProfile(
            email=email,
            firebase_uid=firebase_uid,
            full_name=full_name,
            gender=gender,
            avatar_url=avatar_url,
            onboarding_completed=False,
        )
        db.add(profile)
        db.flush()
        profile_id = profile.id
        db.commit()
        logger.info("✅ User profile created")
        return ProfileUpsertResult(profile_id, created=True)

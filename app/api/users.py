# app/api/users.py
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.db import db_access as dbx
from app.models.user import (
    MessageResponse,
    OnboardingStatusRequest,
    ProfileDeleteResponse,
    ProfileUpsertRequest,
    ProfileUpsertResponse,
    UserProfileRecord,
)
from app.services.onboarding_service import set_onboarding_status
from app.services.profile_service import upsert_profile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/all", response_model=List[UserProfileRecord])
def get_all_users(db: Session = Depends(get_db)):
    """Every profile with its onboarding answers, newest first (admin)."""
    logger.info("📥 GET /api/users/all")
    return [UserProfileRecord.from_rows(p, o) for p, o in dbx.list_profiles(db)]


@router.get("/profile", response_model=Optional[UserProfileRecord])
def get_profile(
    email: Optional[str] = None,
    firebase_uid: Optional[str] = None,
    db: Session = Depends(get_db),
):
    logger.info(f"📥 GET /api/users/profile - email: {email}, firebase_uid: {firebase_uid}")
    row = dbx.find_profile(db, email=email, firebase_uid=firebase_uid)
    if row is None:
        logger.info("⚠️ User not found")
        return None

    logger.info("✅ User profile retrieved")
    return UserProfileRecord.from_rows(*row)


@router.post("/profile", response_model=ProfileUpsertResponse)
def save_profile(
    payload: ProfileUpsertRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """Create or update a user profile."""
    logger.info(f"📥 POST /api/users/profile - email: {payload.email}")
    result = upsert_profile(
        db,
        payload.email,
        firebase_uid=payload.firebase_uid,
        full_name=payload.full_name,
        gender=payload.gender,
        avatar_url=payload.avatar_url,
    )
    if result.created:
        response.status_code = status.HTTP_201_CREATED
        return ProfileUpsertResponse(message="Profile created", id=result.id)
    return ProfileUpsertResponse(message="Profile updated", id=result.id)


@router.put("/onboarding-status", response_model=MessageResponse)
def update_onboarding_status(payload: OnboardingStatusRequest, db: Session = Depends(get_db)):
    logger.info(
        f"📥 PUT /api/users/onboarding-status - email: {payload.email}, completed: {payload.completed}"
    )
    set_onboarding_status(db, payload.email, payload.completed)
    return MessageResponse(message="Onboarding status updated")


@router.delete("/profile", response_model=ProfileDeleteResponse)
def delete_profile(email: Optional[str] = None, db: Session = Depends(get_db)):
    """Remove a profile and its onboarding answers (admin)."""
    logger.info(f"📥 DELETE /api/users/profile - email: {email}")
    profile_id = dbx.delete_profile(db, email)
    return ProfileDeleteResponse(message="Profile deleted", id=profile_id)

# models/user.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ProfileUpsertRequest(BaseModel):
    email: Optional[str] = None
    firebase_uid: Optional[str] = None
    full_name: Optional[str] = None
    gender: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileUpsertResponse(BaseModel):
    message: str
    id: str


class OnboardingStatusRequest(BaseModel):
    email: Optional[str] = None
    completed: bool = False


class MessageResponse(BaseModel):
    message: str


class ProfileDeleteResponse(BaseModel):
    message: str
    id: str


class UserProfileRecord(BaseModel):
    """A profile row with its onboarding answers (null when not submitted)."""

    id: str
    email: str
    firebase_uid: Optional[str] = None
    full_name: Optional[str] = None
    gender: Optional[str] = None
    avatar_url: Optional[str] = None
    onboarding_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    fitness_goal: Optional[str] = None
    current_fitness_level: Optional[str] = None
    workout_frequency: Optional[str] = None
    diet_preference: Optional[str] = None
    motivation: Optional[str] = None
    biggest_challenge: Optional[str] = None
    how_found_us: Optional[str] = None
    feature_interest: Optional[List[str]] = None
    willing_to_pay: Optional[str] = None
    price_range: Optional[str] = None

    @classmethod
    def from_rows(cls, profile, onboarding=None) -> "UserProfileRecord":
        data = {
            "id": profile.id,
            "email": profile.email,
            "firebase_uid": profile.firebase_uid,
            "full_name": profile.full_name,
            "gender": profile.gender,
            "avatar_url": profile.avatar_url,
            "onboarding_completed": bool(profile.onboarding_completed),
            "created_at": profile.created_at,
            "updated_at": profile.updated_at,
        }
        if onboarding is not None:
            data.update(
                fitness_goal=onboarding.fitness_goal,
                current_fitness_level=onboarding.current_fitness_level,
                workout_frequency=onboarding.workout_frequency,
                diet_preference=onboarding.diet_preference,
                motivation=onboarding.motivation,
                biggest_challenge=onboarding.biggest_challenge,
                how_found_us=onboarding.how_found_us,
                feature_interest=list(onboarding.feature_interest or []),
                willing_to_pay=onboarding.willing_to_pay,
                price_range=onboarding.price_range,
            )
        return cls(**data)

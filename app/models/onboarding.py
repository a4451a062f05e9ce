# models/onboarding.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator


class OnboardingAnswers(BaseModel):
    fitness_goal: Optional[str] = None
    current_fitness_level: Optional[str] = None
    workout_frequency: Optional[str] = None
    diet_preference: Optional[str] = None
    motivation: Optional[str] = None
    biggest_challenge: Optional[str] = None
    how_found_us: Optional[str] = None
    feature_interest: List[str] = []
    willing_to_pay: Optional[str] = None
    price_range: Optional[str] = None

    @field_validator("feature_interest", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        # null / omitted selections are stored as an empty list
        return [] if v is None else v

    def storage_values(self) -> Dict[str, Any]:
        """Every answer column, for a full overwrite."""
        return self.model_dump()


class OnboardingSubmission(OnboardingAnswers):
    email: Optional[str] = None

    def answers(self) -> OnboardingAnswers:
        return OnboardingAnswers(**self.model_dump(exclude={"email"}))


class OnboardingSubmitResponse(BaseModel):
    message: str
    success: bool

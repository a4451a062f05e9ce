# models/__init__.py
"""
Pydantic models for request/response validation
"""

from .user import (
    ProfileUpsertRequest,
    ProfileUpsertResponse,
    OnboardingStatusRequest,
    MessageResponse,
    ProfileDeleteResponse,
    UserProfileRecord,
)

from .onboarding import (
    OnboardingAnswers,
    OnboardingSubmission,
    OnboardingSubmitResponse,
)

from .admin import (
    DistributionEntry,
    AdminStats,
    RepairResponse,
)

__all__ = [
    # User
    "ProfileUpsertRequest",
    "ProfileUpsertResponse",
    "OnboardingStatusRequest",
    "MessageResponse",
    "ProfileDeleteResponse",
    "UserProfileRecord",

    # Onboarding
    "OnboardingAnswers",
    "OnboardingSubmission",
    "OnboardingSubmitResponse",

    # Admin
    "DistributionEntry",
    "AdminStats",
    "RepairResponse",
]

# models/admin.py
from typing import Dict, List, Optional

from pydantic import BaseModel


class DistributionEntry(BaseModel):
    value: Optional[str]
    count: int


class AdminStats(BaseModel):
    total_users: int
    onboarding_completed: int
    onboarding_pending: int
    total_responses: int
    distributions: Dict[str, List[DistributionEntry]]
    feature_interest: List[DistributionEntry]


class RepairResponse(BaseModel):
    message: str
    repaired: int

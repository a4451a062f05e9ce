# app/services/admin_stats.py
from collections import Counter
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.database import store_guard
from app.db.models import ONBOARDING_TEXT_FIELDS, OnboardingResponse, UserProfile


def _distribution(db: Session, field: str) -> List[Dict[str, object]]:
    column = getattr(OnboardingResponse, field)
    rows = (
        db.query(column, func.count(OnboardingResponse.id))
        .filter(column.isnot(None))
        .group_by(column)
        .all()
    )
    rows.sort(key=lambda r: (-r[1], r[0]))
    return [{"value": value, "count": count} for value, count in rows]


def _feature_interest_distribution(db: Session) -> List[Dict[str, object]]:
    # decoded lists; a response selecting an option twice counts it twice
    counts: Counter = Counter()
    for (selected,) in db.query(OnboardingResponse.feature_interest):
        counts.update(selected or [])
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [{"value": value, "count": count} for value, count in ranked]


def collect_stats(db: Session) -> Dict[str, object]:
    """Aggregate counts over profiles and onboarding answers."""
    with store_guard(db, "Failed to fetch stats"):
        total_users = db.query(func.count(UserProfile.id)).scalar() or 0
        completed = (
            db.query(func.count(UserProfile.id))
            .filter(UserProfile.onboarding_completed.is_(True))
            .scalar()
            or 0
        )
        total_responses = db.query(func.count(OnboardingResponse.id)).scalar() or 0

        return {
            "total_users": total_users,
            "onboarding_completed": completed,
            "onboarding_pending": total_users - completed,
            "total_responses": total_responses,
            "distributions": {field: _distribution(db, field) for field in ONBOARDING_TEXT_FIELDS},
            "feature_interest": _feature_interest_distribution(db),
        }

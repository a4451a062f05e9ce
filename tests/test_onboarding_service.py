# tests/test_onboarding_service.py
"""
Onboarding reconciliation: answers upsert, completion flag, repair job.
"""
import pytest
from sqlalchemy import text

from app.core.exceptions import NotFound, StoreError, ValidationError
from app.db.models import OnboardingResponse, UserProfile
from app.models.onboarding import OnboardingAnswers
from app.services.onboarding_service import (
    USER_NOT_FOUND,
    repair_onboarding_flags,
    set_onboarding_status,
    submit_onboarding,
)
from app.services.profile_service import upsert_profile


def _answers_for(db, user_id):
    return db.query(OnboardingResponse).filter(OnboardingResponse.user_id == user_id).all()


def test_unknown_email_is_not_found_and_writes_nothing(db_session):
    with pytest.raises(NotFound) as exc:
        submit_onboarding(db_session, "ghost@test.com", OnboardingAnswers(fitness_goal="Strength"))

    assert exc.value.error == USER_NOT_FOUND
    assert db_session.query(OnboardingResponse).count() == 0
    assert db_session.query(UserProfile).count() == 0


def test_missing_email_is_rejected(db_session):
    with pytest.raises(ValidationError):
        submit_onboarding(db_session, "", OnboardingAnswers())


def test_first_submission_creates_row_and_sets_flag(db_session):
    profile_id = upsert_profile(db_session, "newuser@test.com").id

    result = submit_onboarding(
        db_session,
        "newuser@test.com",
        OnboardingAnswers(fitness_goal="Weight Loss", feature_interest=["AI Workout Plans", "Meal Plans"]),
    )

    assert result.success is True
    assert result.created is True

    rows = _answers_for(db_session, profile_id)
    assert len(rows) == 1
    assert rows[0].fitness_goal == "Weight Loss"
    assert rows[0].feature_interest == ["AI Workout Plans", "Meal Plans"]

    db_session.expire_all()
    assert db_session.get(UserProfile, profile_id).onboarding_completed is True


def test_resubmission_overwrites_every_field(db_session):
    profile_id = upsert_profile(db_session, "again@test.com").id
    submit_onboarding(
        db_session,
        "again@test.com",
        OnboardingAnswers(
            fitness_goal="Muscle Gain",
            diet_preference="Vegan",
            price_range="$20+",
            feature_interest=["Meal Plans"],
        ),
    )

    result = submit_onboarding(
        db_session, "again@test.com", OnboardingAnswers(fitness_goal="Endurance")
    )

    assert result.created is False
    db_session.expire_all()
    rows = _answers_for(db_session, profile_id)
    assert len(rows) == 1
    assert rows[0].fitness_goal == "Endurance"
    assert rows[0].diet_preference is None
    assert rows[0].price_range is None
    assert rows[0].feature_interest == []


def test_omitted_feature_interest_is_stored_as_empty_list(db_session):
    profile_id = upsert_profile(db_session, "empty@test.com").id
    submit_onboarding(db_session, "empty@test.com", OnboardingAnswers(feature_interest=None))

    raw = db_session.execute(
        text("SELECT feature_interest FROM onboarding_responses WHERE user_id = :uid"),
        {"uid": profile_id},
    ).scalar()
    assert raw == "[]"
    assert _answers_for(db_session, profile_id)[0].feature_interest == []


def test_feature_interest_keeps_order_and_duplicates(db_session):
    profile_id = upsert_profile(db_session, "dupes@test.com").id
    picks = ["Meal Plans", "AI Workout Plans", "Meal Plans"]
    submit_onboarding(db_session, "dupes@test.com", OnboardingAnswers(feature_interest=picks))

    db_session.expire_all()
    assert _answers_for(db_session, profile_id)[0].feature_interest == picks


def test_failed_answer_write_leaves_flag_unset(db_session):
    profile_id = upsert_profile(db_session, "broken@test.com").id
    db_session.execute(text("DROP TABLE onboarding_responses"))

    with pytest.raises(StoreError) as exc:
        submit_onboarding(db_session, "broken@test.com", OnboardingAnswers(fitness_goal="Yoga"))

    assert exc.value.error == "Failed to save onboarding response"
    db_session.expire_all()
    assert db_session.get(UserProfile, profile_id).onboarding_completed is False


def test_set_onboarding_status_toggles_flag(db_session):
    profile_id = upsert_profile(db_session, "toggle@test.com").id

    set_onboarding_status(db_session, "toggle@test.com", True)
    db_session.expire_all()
    assert db_session.get(UserProfile, profile_id).onboarding_completed is True

    set_onboarding_status(db_session, "toggle@test.com", False)
    db_session.expire_all()
    assert db_session.get(UserProfile, profile_id).onboarding_completed is False


def test_set_onboarding_status_unknown_email(db_session):
    with pytest.raises(NotFound):
        set_onboarding_status(db_session, "ghost@test.com", True)


def test_repair_fixes_only_inconsistent_profiles(db_session):
    stale_id = upsert_profile(db_session, "stale@test.com").id
    done_id = upsert_profile(db_session, "done@test.com").id
    fresh_id = upsert_profile(db_session, "fresh@test.com").id

    submit_onboarding(db_session, "stale@test.com", OnboardingAnswers(fitness_goal="Flexibility"))
    submit_onboarding(db_session, "done@test.com", OnboardingAnswers(fitness_goal="Strength"))
    # answers saved but flag lost, as after an interrupted legacy write
    set_onboarding_status(db_session, "stale@test.com", False)

    assert repair_onboarding_flags(db_session) == 1
    assert repair_onboarding_flags(db_session) == 0

    db_session.expire_all()
    assert db_session.get(UserProfile, stale_id).onboarding_completed is True
    assert db_session.get(UserProfile, done_id).onboarding_completed is True
    assert db_session.get(UserProfile, fresh_id).onboarding_completed is False

# tests/test_onboarding_api.py
"""
POST /api/onboarding end to end through the HTTP layer.
"""
from sqlalchemy import text


def _create_profile(client, email="newuser@test.com", **fields):
    response = client.post("/api/users/profile", json={"email": email, **fields})
    assert response.status_code in (200, 201)
    return response.json()["id"]


def test_submit_then_read_profile(client, onboarding_payload):
    _create_profile(client, full_name="New User")

    response = client.post("/api/onboarding", json=onboarding_payload)

    assert response.status_code == 200
    assert response.json() == {"message": "Onboarding saved successfully", "success": True}

    profile = client.get("/api/users/profile", params={"email": "newuser@test.com"}).json()
    assert profile["onboarding_completed"] is True
    assert profile["fitness_goal"] == "Weight Loss"
    assert profile["feature_interest"] == ["AI Workout Plans", "Meal Plans"]


def test_submit_for_unknown_user_is_404(client, onboarding_payload, database):
    response = client.post("/api/onboarding", json=onboarding_payload)

    assert response.status_code == 404
    assert response.json()["error"] == "User not found. Please sign in first."

    with database.session() as db:
        assert db.execute(text("SELECT COUNT(*) FROM onboarding_responses")).scalar() == 0


def test_submit_without_email_is_400(client, onboarding_payload):
    onboarding_payload.pop("email")

    response = client.post("/api/onboarding", json=onboarding_payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Email is required"}


def test_resubmission_replaces_answers(client, onboarding_payload):
    _create_profile(client)
    client.post("/api/onboarding", json=onboarding_payload)

    response = client.post(
        "/api/onboarding",
        json={"email": "newuser@test.com", "fitness_goal": "Muscle Gain"},
    )
    assert response.status_code == 200

    profile = client.get("/api/users/profile", params={"email": "newuser@test.com"}).json()
    assert profile["fitness_goal"] == "Muscle Gain"
    assert profile["diet_preference"] is None
    assert profile["feature_interest"] == []

    listing = client.get("/api/users/all").json()
    assert len(listing) == 1


def test_null_feature_interest_reads_back_as_empty_list(client):
    _create_profile(client)

    client.post("/api/onboarding", json={"email": "newuser@test.com", "feature_interest": None})

    profile = client.get("/api/users/profile", params={"email": "newuser@test.com"}).json()
    assert profile["feature_interest"] == []


def test_malformed_feature_interest_is_400(client):
    _create_profile(client)

    response = client.post(
        "/api/onboarding",
        json={"email": "newuser@test.com", "feature_interest": "Meal Plans"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request"
    assert any("feature_interest" in d for d in body["details"])


def test_store_failure_reports_success_false(client, onboarding_payload, database):
    _create_profile(client)
    with database.engine.begin() as conn:
        conn.execute(text("DROP TABLE onboarding_responses"))

    response = client.post("/api/onboarding", json=onboarding_payload)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to save onboarding response"
    assert body["success"] is False
    assert "onboarding_responses" in body["details"]

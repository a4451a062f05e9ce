"""
Pytest configuration and fixtures

Every test gets its own in-memory SQLite database, so nothing leaks
between tests.
"""
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import Base, Database
from app.main import create_app
import app.db.models  # noqa: F401


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        environment="test",
        log_level="DEBUG",
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def database(settings):
    database = Database(settings.database_url)
    Base.metadata.create_all(bind=database.engine)
    yield database
    database.dispose()


@pytest.fixture
def db_session(database):
    with database.session() as session:
        yield session


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def onboarding_payload():
    return {
        "email": "newuser@test.com",
        "fitness_goal": "Weight Loss",
        "current_fitness_level": "Beginner",
        "workout_frequency": "3-4 times a week",
        "diet_preference": "Vegetarian",
        "motivation": "Feel healthier",
        "biggest_challenge": "Consistency",
        "how_found_us": "Instagram",
        "feature_interest": ["AI Workout Plans", "Meal Plans"],
        "willing_to_pay": "Yes",
        "price_range": "$10-20",
    }

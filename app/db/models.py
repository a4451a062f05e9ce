# db/models.py
import json
import logging
import uuid

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression, func
from sqlalchemy.types import TypeDecorator

from app.core.database import Base

logger = logging.getLogger(__name__)


def generate_uuid():
    return str(uuid.uuid4())


class JSONEncodedList(TypeDecorator):
    """
    Ordered list of strings stored as JSON text.
    Writes never store NULL; NULL or unreadable stored values read back as [].
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return json.dumps([str(v) for v in (value or [])])

    def process_result_value(self, value, dialect):
        if value is None or value == "":
            return []
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning(f"Unreadable list value in database: {value!r}")
            return []
        if not isinstance(decoded, list):
            return []
        return [str(v) for v in decoded]


class UserProfile(Base):
    __tablename__ = 'user_profiles'

    id                   = Column(String(36), primary_key=True, default=generate_uuid)
    email                = Column(String(255), unique=True, index=True, nullable=False)
    firebase_uid         = Column(String(128), index=True, nullable=True)
    full_name            = Column(String(255))
    gender               = Column(String(50))
    avatar_url           = Column(Text)
    onboarding_completed = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    created_at           = Column(DateTime(timezone=True), server_default=func.now())
    updated_at           = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    onboarding = relationship("OnboardingResponse", back_populates="user", cascade="all, delete-orphan")


class OnboardingResponse(Base):
    __tablename__ = 'onboarding_responses'

    id      = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey('user_profiles.id', ondelete='CASCADE'), nullable=False)

    # Questionnaire answers
    fitness_goal          = Column(String(255))
    current_fitness_level = Column(String(255))
    workout_frequency     = Column(String(255))
    diet_preference       = Column(String(255))
    motivation            = Column(Text)
    biggest_challenge     = Column(Text)
    how_found_us          = Column(String(255))
    feature_interest      = Column(JSONEncodedList, nullable=False, default=list)
    willing_to_pay        = Column(String(255))
    price_range           = Column(String(255))
    created_at            = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("UserProfile", back_populates="onboarding")

    # Indexes
    __table_args__ = (
        Index('idx_onboarding_responses_user_id', 'user_id'),
    )


# Answer columns, in questionnaire order
ONBOARDING_TEXT_FIELDS = (
    "fitness_goal",
    "current_fitness_level",
    "workout_frequency",
    "diet_preference",
    "motivation",
    "biggest_challenge",
    "how_found_us",
    "willing_to_pay",
    "price_range",
)

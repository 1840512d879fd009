"""Learned preference model — JSONB dimension weights produced by preference learning."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from beacon.models.base import Base, TimestampMixin, UUIDMixin


class LearnedPreference(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "user_preferences_learned"

    user_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), unique=True, nullable=False)

    # Derived preferences
    preferred_age_range = Column(String(20))  # half-open interval text, e.g. "[25,35)"
    preferred_distance_km = Column(Integer)
    preferred_profile_types = Column(JSONB, server_default="[]", nullable=False, default=list)
    preferred_interests = Column(JSONB, server_default="[]", nullable=False, default=list)
    preferred_archetypes = Column(JSONB, server_default="[]", nullable=False, default=list)

    # Normalized weight maps: {"profile_types": {...}, "interests": {...}, "archetypes": {...}, "age_scores": {...}}
    interaction_weights = Column(JSONB, server_default="{}", nullable=False, default=dict)

    interaction_count = Column(Integer, server_default="0", nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True))

    # Relationships
    user = relationship("UserProfile", back_populates="learned_preferences")

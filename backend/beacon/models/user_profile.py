"""User profile model — the discovery profile rows candidates are scored from."""

from sqlalchemy import Column, String, Float, Boolean, DateTime, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from beacon.models.base import Base, TimestampMixin, UUIDMixin


class UserProfile(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255))
    avatar_url = Column(Text)

    # Profile content
    photos = Column(JSONB(none_as_null=True))  # ordered list of photo URLs; NULL hides the profile from discovery
    bio = Column(Text)
    city = Column(String(100), index=True)
    profile_type = Column(String(50))  # standard, seller, organizer, ...
    age = Column(Integer)

    # Attribute sets (JSONB string arrays)
    tags = Column(JSONB, default=list)
    interests = Column(JSONB, default=list)
    looking_for = Column(JSONB, default=list)
    archetypes = Column(JSONB, default=list)
    essentials = Column(JSONB, default=list)
    dealbreakers = Column(JSONB, default=list)

    # Location
    last_lat = Column(Float)
    last_lng = Column(Float)
    last_seen = Column(DateTime(timezone=True))

    # Verification
    verified = Column(Boolean, default=False, nullable=False)
    verified_seller = Column(Boolean, default=False, nullable=False)
    verified_organizer = Column(Boolean, default=False, nullable=False)

    onboarding_complete = Column(Boolean, default=False, nullable=False, index=True)

    # Relationships
    interactions = relationship("UserInteraction", back_populates="user", cascade="all, delete-orphan")
    learned_preferences = relationship(
        "LearnedPreference", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

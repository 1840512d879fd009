"""User interaction model — append-only log of user-profile events."""

from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey, Index, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from beacon.models.base import Base, UUIDMixin


class UserInteraction(UUIDMixin, Base):
    __tablename__ = "user_interactions"

    user_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), nullable=False)
    target_email = Column(String(255), nullable=False)
    interaction_type = Column(String(20), nullable=False)  # view, like, message, meet, save, skip, block
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Optional context captured at interaction time
    distance_km = Column(Float)
    lat = Column(Float)
    lng = Column(Float)
    duration_seconds = Column(Integer)
    extra_data = Column("metadata", JSONB, default=dict)

    # Relationships
    user = relationship("UserProfile", back_populates="interactions")

    __table_args__ = (
        Index("idx_interactions_user_created", "user_email", "created_at"),
        Index("idx_interactions_target", "target_email"),
    )

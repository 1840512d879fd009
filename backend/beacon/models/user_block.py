"""User block model — who a user has hidden from their feed."""

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint

from beacon.models.base import Base, TimestampMixin, UUIDMixin


class UserBlock(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "user_blocks"

    user_email = Column(String(255), ForeignKey("users.email", ondelete="CASCADE"), nullable=False, index=True)
    blocked_email = Column(String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_email", "blocked_email", name="uq_user_blocks_pair"),
    )

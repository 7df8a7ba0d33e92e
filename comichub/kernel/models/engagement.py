"""
Votes and saves on recommendations.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from comichub.kernel.models.base import Base, TimestampMixin, generate_uuid, utcnow


class VoteType(str, Enum):
    UP = "up"
    DOWN = "down"


class Vote(Base, TimestampMixin):
    """One vote per user per recommendation."""

    __tablename__ = "votes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("profiles.id"),
        nullable=False,
        index=True,
    )
    recommendation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("recommendations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vote_type: Mapped[VoteType] = mapped_column(String(10), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "recommendation_id", name="uq_votes_user_recommendation"),
    )


class Save(Base):
    """A recommendation bookmarked by a user."""

    __tablename__ = "saves"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("profiles.id"),
        nullable=False,
        index=True,
    )
    recommendation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("recommendations.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "recommendation_id", name="uq_saves_user_recommendation"),
    )

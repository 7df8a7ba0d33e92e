"""
Recommendation model - a user-submitted comic entry and its moderation state.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from comichub.kernel.models.base import Base, TimestampMixin, generate_uuid
from comichub.kernel.models.profile import AppealStatus


class ComicType(str, Enum):
    MANGA = "manga"
    MANHWA = "manhwa"
    MANHUA = "manhua"
    WEBTOON = "webtoon"
    COMIC = "comic"
    OTHER = "other"


class PublicationStatus(str, Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    HIATUS = "hiatus"
    CANCELLED = "cancelled"


class ContentRating(str, Enum):
    ALL = "all"
    TEEN = "teen"
    MATURE = "mature"
    ADULT = "adult"


class Recommendation(Base, TimestampMixin):
    """
    A comic recommendation.

    Disposition is derived from the moderation fields:
    - pending: not approved, no rejection reason
    - approved: is_approved
    - rejected: not approved, rejection_reason set
    Featuring is an orthogonal flag on approved entries.
    """

    __tablename__ = "recommendations"

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

    # Catalog metadata
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[ComicType] = mapped_column(String(20), nullable=False)
    status: Mapped[PublicationStatus] = mapped_column(String(20), nullable=False)
    genres: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    official_platforms: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    content_rating: Mapped[ContentRating] = mapped_column(
        String(20),
        nullable=False,
        default=ContentRating.ALL,
    )
    cover_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    why_recommend: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    author: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    artist: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    year_released: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    chapter_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Engagement counters
    upvotes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    downvotes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    score: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    save_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    review_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Approval / rejection
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rejected_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(), nullable=True)

    # Featuring
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    featured_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    featured_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(), nullable=True)

    # Appeal against rejection
    appeal_status: Mapped[AppealStatus] = mapped_column(
        String(20),
        default=AppealStatus.NONE,
        nullable=False,
    )
    appeal_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    appeal_submitted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("ix_recommendations_approved_created", "is_approved", "created_at"),
    )

    @property
    def is_rejected(self) -> bool:
        return not self.is_approved and self.rejection_reason is not None

    def __repr__(self) -> str:
        return f"<Recommendation {self.title!r}>"

"""
News article model, managed by staff.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, Integer, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from comichub.kernel.models.base import Base, TimestampMixin, generate_uuid


class NewsCategory(str, Enum):
    INDUSTRY = "industry"
    RELEASE = "release"
    ADAPTATION = "adaptation"
    EVENT = "event"
    CREATOR = "creator"
    ANNOUNCEMENT = "announcement"


class News(Base, TimestampMixin):
    """A news article. Only published articles are publicly visible."""

    __tablename__ = "news"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(260), unique=True, index=True, nullable=False)
    excerpt: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    source_name: Mapped[str] = mapped_column(String(200), nullable=False)
    source_url: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[NewsCategory] = mapped_column(String(30), nullable=False, index=True)
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    cover_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_affiliate: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    affiliate_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    affiliate_disclaimer: Mapped[str] = mapped_column(Text, default="", nullable=False)
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    published_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(), nullable=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

"""
Report model - user reports about content or accounts.

Reports are status-transitioned by moderators and never deleted.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from comichub.kernel.models.base import Base, generate_uuid, utcnow


class ReportStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReportedEntity(str, Enum):
    RECOMMENDATION = "recommendation"
    REVIEW = "review"
    USER = "user"


class Report(Base):
    """A report filed by a user."""

    __tablename__ = "reports"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    reporter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("profiles.id"),
        nullable=False,
        index=True,
    )
    entity_type: Mapped[ReportedEntity] = mapped_column(String(30), nullable=False)
    entity_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)
    reason: Mapped[str] = mapped_column(String(200), nullable=False)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[ReportStatus] = mapped_column(
        String(20),
        default=ReportStatus.PENDING,
        nullable=False,
        index=True,
    )
    resolved_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(), nullable=True)
    resolved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    resolution_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

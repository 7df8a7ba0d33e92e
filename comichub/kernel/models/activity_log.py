"""
Immutable activity log for the moderation audit trail.

Every moderation transition appends exactly one row here, in the same
transaction as the mutation it describes.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, JSON, String, Text, func, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from comichub.kernel.models.base import Base, utcnow


class AuditEntityType(str, Enum):
    """Entity kinds a moderation action can target."""
    RECOMMENDATION = "recommendation"
    USER = "user"
    REVIEW = "review"
    REPORT = "report"


class ActivityLog(Base):
    """
    Append-only audit entry.

    No updates or deletes are ever issued against this table.
    The integer key doubles as a tiebreaker for entries created
    within the same clock tick.
    """

    __tablename__ = "activity_logs"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Actor
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(),
        nullable=True,
        index=True,
    )

    # Human-readable, deterministic description, e.g. "rejected recommendation"
    action: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    # Target
    entity_type: Mapped[AuditEntityType] = mapped_column(
        String(30),
        nullable=False,
    )
    entity_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(),
        nullable=True,
        index=True,
    )
    target_label: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    details: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        Index("ix_activity_logs_entity", "entity_type", "entity_id"),
    )

    def __repr__(self) -> str:
        return f"<ActivityLog {self.action!r} {self.entity_type}:{self.entity_id}>"

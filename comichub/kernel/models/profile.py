"""
Profile model for identity and account moderation state.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from comichub.kernel.models.base import Base, TimestampMixin, generate_uuid


class UserRole(str, Enum):
    """Account roles."""
    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


STAFF_ROLES = frozenset({UserRole.MODERATOR, UserRole.ADMIN})


class AppealStatus(str, Enum):
    """Lifecycle of an appeal against a rejection or a ban."""
    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Profile(Base, TimestampMixin):
    """A user's account and public profile."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(
        String(30),
        unique=True,
        index=True,
        nullable=False,
    )
    display_name: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    bio: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    role: Mapped[UserRole] = mapped_column(
        String(20),
        default=UserRole.USER,
        nullable=False,
        index=True,
    )

    # Ban state
    is_banned: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    ban_reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    banned_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    banned_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(),
        nullable=True,
    )

    # Ban appeal
    appeal_status: Mapped[AppealStatus] = mapped_column(
        String(20),
        default=AppealStatus.NONE,
        nullable=False,
    )
    appeal_text: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    appeal_submitted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Optimistic concurrency token, bumped on every ORM update
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_staff(self) -> bool:
        return UserRole(self.role) in STAFF_ROLES

    def __repr__(self) -> str:
        return f"<Profile {self.username}>"

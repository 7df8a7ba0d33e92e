"""
Base model with common fields and utilities.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy import DateTime, func, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_uuid() -> uuid.UUID:
    """Generate a new UUID."""
    return uuid.uuid4()


def utcnow() -> datetime:
    """Timezone-aware current time used for lifecycle timestamps."""
    return datetime.now(timezone.utc)


def enum_value(value: Any) -> Any:
    """
    Return the raw value of an enum member, or the value itself.

    String-backed enum columns come back from the database as plain strings,
    while freshly assigned attributes are still enum members.
    """
    return value.value if isinstance(value, Enum) else value


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    # Use generic Uuid type for cross-database compatibility
    type_annotation_map = {
        uuid.UUID: Uuid(),
    }


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    # Client-side defaults keep sub-second ordering on SQLite
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )

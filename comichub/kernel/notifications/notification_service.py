"""
Notification delivery: row inserts addressed to a single user.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.models.base import utcnow
from comichub.kernel.models.notification import Notification
from comichub.logging_config import get_logger

logger = get_logger(__name__)


class NotificationService:
    """Create and read user notifications."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def notify(
        self,
        user_id: uuid.UUID,
        type: str,
        title: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[Notification]:
        """
        Best-effort insert inside a SAVEPOINT.

        A failure rolls back only the savepoint; the surrounding unit of work
        (entity mutation + audit entry) is left intact. Returns None on failure.
        """
        notification = Notification(
            user_id=user_id,
            type=type,
            title=title,
            data=data or {},
        )
        try:
            async with self.session.begin_nested():
                self.session.add(notification)
        except SQLAlchemyError:
            logger.warning(
                "Notification insert failed",
                exc_info=True,
                extra={"user_id": str(user_id), "notification_type": type},
            )
            return None
        return notification

    async def list_for_user(self, user_id: uuid.UUID, limit: int = 50) -> List[Notification]:
        """Latest notifications for a user, newest first."""
        query = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def mark_all_read(self, user_id: uuid.UUID) -> int:
        """Mark every unread notification of the user as read. Returns the row count."""
        result = await self.session.execute(
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read.is_(False),
            )
            .values(is_read=True, read_at=utcnow())
        )
        return result.rowcount or 0

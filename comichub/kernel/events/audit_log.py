"""
Audit log service for the append-only moderation trail.

Every moderation transition MUST append its entry through this service,
inside the same session as the mutation, before the request commits.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, and_, desc, func
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.models.activity_log import ActivityLog, AuditEntityType
from comichub.kernel.models.profile import Profile


class AuditLog:
    """
    Append and query the immutable activity log.

    Usage:
        audit_log = AuditLog(session)
        await audit_log.append(
            actor_id=moderator.id,
            action="rejected recommendation",
            entity_type=AuditEntityType.RECOMMENDATION,
            entity_id=recommendation.id,
            target_label=recommendation.title,
            details={"reason": "low quality", "action": "reject"},
        )

    Entries are never updated or deleted.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(
        self,
        actor_id: Optional[uuid.UUID],
        action: str,
        entity_type: AuditEntityType,
        entity_id: Optional[uuid.UUID],
        target_label: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> ActivityLog:
        """
        Append one entry and flush it.

        Flushing here means a store failure surfaces inside the caller's
        unit of work, before the mutation can be committed on its own.
        """
        entry = ActivityLog(
            user_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            target_label=target_label,
            details=self._serialize(details or {}),
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def list_entries(
        self,
        page: int = 1,
        page_size: int = 50,
    ) -> Tuple[List[Tuple[ActivityLog, Optional[str]]], int, bool]:
        """
        Page through the log, newest first.

        Returns:
            ([(entry, actor_username), ...], total, has_more)
        """
        page = max(page, 1)
        offset = (page - 1) * page_size

        query = (
            select(ActivityLog, Profile.username)
            .outerjoin(Profile, ActivityLog.user_id == Profile.id)
            .order_by(desc(ActivityLog.created_at), desc(ActivityLog.id))
            .offset(offset)
            .limit(page_size)
        )
        result = await self.session.execute(query)
        rows = [(entry, username) for entry, username in result.all()]

        total = await self.count()
        return rows, total, total > offset + page_size

    async def entity_history(
        self,
        entity_type: AuditEntityType,
        entity_id: uuid.UUID,
        limit: int = 100,
    ) -> List[ActivityLog]:
        """Entries for one entity, oldest first."""
        query = (
            select(ActivityLog)
            .where(
                and_(
                    ActivityLog.entity_type == entity_type,
                    ActivityLog.entity_id == entity_id,
                )
            )
            .order_by(ActivityLog.created_at, ActivityLog.id)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, entity_id: Optional[uuid.UUID] = None) -> int:
        query = select(func.count(ActivityLog.id))
        if entity_id:
            query = query.where(ActivityLog.entity_id == entity_id)
        result = await self.session.execute(query)
        return result.scalar() or 0

    def _serialize(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Convert payload values to JSON-serializable types."""
        result = {}
        for key, value in payload.items():
            result[key] = self._serialize_value(value)
        return result

    def _serialize_value(self, value: Any) -> Any:
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, dict):
            return self._serialize(value)
        if isinstance(value, (list, tuple)):
            return [self._serialize_value(v) for v in value]
        return value

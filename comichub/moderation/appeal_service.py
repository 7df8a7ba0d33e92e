"""
Appeal submission against a recommendation rejection or an account ban.

One appeal per rejection/ban cycle: the cycle is reopened only when a
moderator rejects or bans again.
"""

import uuid
from enum import Enum
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.errors import ConflictError, Forbidden, NotFound, Unauthorized, ValidationError
from comichub.kernel.models.base import enum_value, utcnow
from comichub.kernel.models.profile import AppealStatus, Profile
from comichub.kernel.models.recommendation import Recommendation
from comichub.logging_config import get_logger

logger = get_logger(__name__)


class AppealKind(str, Enum):
    RECOMMENDATION = "recommendation"
    BAN = "ban"


class AppealService:
    """Record appeals. Appeal submission is not a moderation action and is not audited."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def submit(
        self,
        actor: Optional[Profile],
        kind: Union[AppealKind, str],
        target_id: Optional[uuid.UUID],
        appeal_text: Optional[str],
    ) -> Union[Recommendation, Profile]:
        """
        Submit an appeal and mark it pending.

        Raises:
            Unauthorized: No actor
            ValidationError: Blank appeal text or unknown kind
            NotFound: Recommendation does not exist
            Forbidden: Actor does not own the target, or is not banned
            ConflictError: Target is not appealable, or this cycle already has an appeal
        """
        if actor is None:
            raise Unauthorized()

        text = (appeal_text or "").strip()
        if not text:
            raise ValidationError("Appeal text is required")

        try:
            kind = AppealKind(kind)
        except ValueError:
            raise ValidationError("type must be 'recommendation' or 'ban'")

        if kind is AppealKind.RECOMMENDATION:
            target = await self._recommendation_target(actor, target_id)
        else:
            target = self._ban_target(actor, target_id)

        if enum_value(target.appeal_status) != AppealStatus.NONE.value:
            raise ConflictError("An appeal has already been submitted")

        target.appeal_text = text
        target.appeal_status = AppealStatus.PENDING
        target.appeal_submitted_at = utcnow()
        await self.session.flush()

        logger.info(
            "Appeal submitted",
            extra={
                "user_id": str(actor.id),
                "appeal_kind": kind.value,
                "target_id": str(target.id),
            },
        )
        return target

    async def _recommendation_target(
        self,
        actor: Profile,
        target_id: Optional[uuid.UUID],
    ) -> Recommendation:
        if target_id is None:
            raise ValidationError("target_id is required")
        rec = await self.session.get(Recommendation, target_id)
        if rec is None:
            raise NotFound("Recommendation not found")
        if rec.user_id != actor.id:
            raise Forbidden("You can only appeal your own recommendations")
        if not rec.is_rejected:
            raise ConflictError("Only rejected recommendations can be appealed")
        return rec

    @staticmethod
    def _ban_target(actor: Profile, target_id: Optional[uuid.UUID]) -> Profile:
        if target_id is not None and target_id != actor.id:
            raise Forbidden("You can only appeal your own ban")
        if not actor.is_banned:
            raise Forbidden("Your account is not suspended")
        return actor

"""
Votes and saves, with the denormalized counters on the recommendation.
"""

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.catalog.counters import adjust_counters
from comichub.kernel.errors import Forbidden, NotFound
from comichub.kernel.models.base import enum_value
from comichub.kernel.models.engagement import Save, Vote, VoteType
from comichub.kernel.models.profile import Profile
from comichub.kernel.models.recommendation import Recommendation


class EngagementService:
    """
    Vote and save toggles.

    Counters are kept in step with the rows they count and are written
    SQL-side. score = upvotes - downvotes.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def vote(
        self,
        user: Profile,
        recommendation_id: uuid.UUID,
        vote_type: VoteType,
    ) -> Tuple[Recommendation, Optional[str]]:
        """
        Create, switch or remove the caller's vote.

        Voting the same way twice removes the vote.

        Returns:
            (recommendation, current vote type or None)
        """
        rec = await self._approved_recommendation(user, recommendation_id)
        vote_type = VoteType(vote_type)

        result = await self.session.execute(
            select(Vote).where(
                Vote.user_id == user.id,
                Vote.recommendation_id == recommendation_id,
            )
        )
        existing = result.scalar_one_or_none()

        deltas = {"upvotes": 0, "downvotes": 0}
        current: Optional[str]
        if existing is None:
            self.session.add(
                Vote(user_id=user.id, recommendation_id=recommendation_id, vote_type=vote_type)
            )
            deltas[self._column(vote_type)] += 1
            current = vote_type.value
        elif enum_value(existing.vote_type) == vote_type.value:
            await self.session.delete(existing)
            deltas[self._column(vote_type)] -= 1
            current = None
        else:
            deltas[self._column(VoteType(enum_value(existing.vote_type)))] -= 1
            existing.vote_type = vote_type
            deltas[self._column(vote_type)] += 1
            current = vote_type.value

        await self.session.flush()
        await adjust_counters(self.session, rec, **deltas)
        return rec, current

    async def toggle_save(
        self,
        user: Profile,
        recommendation_id: uuid.UUID,
    ) -> Tuple[Recommendation, bool]:
        """Save or unsave. Returns (recommendation, saved)."""
        rec = await self._approved_recommendation(user, recommendation_id)

        result = await self.session.execute(
            select(Save).where(
                Save.user_id == user.id,
                Save.recommendation_id == recommendation_id,
            )
        )
        existing = result.scalar_one_or_none()

        if existing is None:
            self.session.add(Save(user_id=user.id, recommendation_id=recommendation_id))
            saved = True
        else:
            await self.session.delete(existing)
            saved = False

        await self.session.flush()
        await adjust_counters(self.session, rec, save_count=1 if saved else -1)
        return rec, saved

    async def list_saved(self, user: Profile) -> List[Recommendation]:
        """The caller's saved recommendations that are still approved, newest save first."""
        result = await self.session.execute(
            select(Recommendation)
            .join(Save, Save.recommendation_id == Recommendation.id)
            .where(
                Save.user_id == user.id,
                Recommendation.is_approved.is_(True),
            )
            .order_by(desc(Save.created_at))
        )
        return list(result.scalars().all())

    async def _approved_recommendation(
        self,
        user: Profile,
        recommendation_id: uuid.UUID,
    ) -> Recommendation:
        if user.is_banned:
            raise Forbidden("Your account is suspended")
        rec = await self.session.get(Recommendation, recommendation_id)
        if rec is None or not rec.is_approved:
            raise NotFound("Recommendation not found")
        return rec

    @staticmethod
    def _column(vote_type: VoteType) -> str:
        return "upvotes" if vote_type is VoteType.UP else "downvotes"

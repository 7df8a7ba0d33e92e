"""
Recommendation submission and public browsing.
"""

import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.errors import Forbidden, NotFound, ValidationError
from comichub.kernel.models.profile import Profile
from comichub.kernel.models.recommendation import ComicType, Recommendation
from comichub.logging_config import get_logger

logger = get_logger(__name__)

SORT_ORDERS = ("score", "trending", "recent")


class RecommendationService:
    """Create recommendations and query the approved catalog."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, author: Profile, data: Dict[str, Any]) -> Recommendation:
        """
        Submit a recommendation.

        Staff submissions are approved immediately; everyone else's wait in
        the pending queue.
        """
        if author.is_banned:
            raise Forbidden("Your account is suspended")

        rec = Recommendation(
            user_id=author.id,
            is_approved=author.is_staff,
            **data,
        )
        self.session.add(rec)
        await self.session.flush()

        logger.info(
            "Recommendation submitted",
            extra={
                "recommendation_id": str(rec.id),
                "user_id": str(author.id),
                "auto_approved": rec.is_approved,
            },
        )
        return rec

    async def list_approved(
        self,
        page: int = 1,
        limit: int = 20,
        type: Optional[str] = None,
        genre: Optional[str] = None,
        sort: str = "score",
    ) -> Tuple[List[Recommendation], int, bool]:
        """Approved recommendations with optional type/genre filters."""
        if sort not in SORT_ORDERS:
            raise ValidationError(f"sort must be one of: {', '.join(SORT_ORDERS)}")

        query = select(Recommendation).where(Recommendation.is_approved.is_(True))
        if type:
            try:
                query = query.where(Recommendation.type == ComicType(type).value)
            except ValueError:
                raise ValidationError(f"Unknown comic type: {type}")

        if sort == "trending":
            order = (desc(Recommendation.upvotes), desc(Recommendation.created_at))
        elif sort == "recent":
            order = (desc(Recommendation.created_at),)
        else:
            order = (desc(Recommendation.score), desc(Recommendation.created_at))

        page = max(page, 1)
        offset = (page - 1) * limit

        if genre:
            # JSON list column; membership is checked after loading
            result = await self.session.execute(query.order_by(*order))
            matching = [rec for rec in result.scalars().all() if genre in (rec.genres or [])]
            total = len(matching)
            return matching[offset:offset + limit], total, total > offset + limit

        result = await self.session.execute(query.order_by(*order).offset(offset).limit(limit))
        items = list(result.scalars().all())

        count_result = await self.session.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar() or 0
        return items, total, total > offset + limit

    async def get_approved(self, recommendation_id: uuid.UUID) -> Recommendation:
        """A single approved recommendation; anything else is NotFound."""
        rec = await self.session.get(Recommendation, recommendation_id)
        if rec is None or not rec.is_approved:
            raise NotFound("Recommendation not found")
        return rec

    async def list_by_author(self, author_id: uuid.UUID) -> List[Recommendation]:
        """All of an author's submissions, whatever their moderation state."""
        result = await self.session.execute(
            select(Recommendation)
            .where(Recommendation.user_id == author_id)
            .order_by(desc(Recommendation.created_at))
        )
        return list(result.scalars().all())

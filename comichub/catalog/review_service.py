"""
Reviews written by users on approved recommendations.
"""

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.catalog.counters import adjust_counters
from comichub.kernel.errors import Forbidden, NotFound, ValidationError
from comichub.kernel.models.base import utcnow
from comichub.kernel.models.profile import Profile
from comichub.kernel.models.recommendation import Recommendation
from comichub.kernel.models.review import Review
from comichub.logging_config import get_logger

logger = get_logger(__name__)


class ReviewService:
    """Author-side review operations. Moderation lives in ModerationService."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_visible(
        self,
        recommendation_id: uuid.UUID,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Tuple[Review, Optional[str]]], int, bool]:
        """Visible reviews with the author's username, newest first."""
        conditions = (
            Review.recommendation_id == recommendation_id,
            Review.is_approved.is_(True),
        )
        result = await self.session.execute(
            select(Review, Profile.username)
            .outerjoin(Profile, Review.user_id == Profile.id)
            .where(*conditions)
            .order_by(desc(Review.created_at))
            .offset(offset)
            .limit(limit)
        )
        rows = [(review, username) for review, username in result.all()]

        count_result = await self.session.execute(
            select(func.count(Review.id)).where(*conditions)
        )
        total = count_result.scalar() or 0
        return rows, total, total > offset + limit

    async def create(
        self,
        author: Profile,
        recommendation_id: uuid.UUID,
        content: str,
        rating: Optional[int] = None,
        contains_spoilers: bool = False,
    ) -> Review:
        if author.is_banned:
            raise Forbidden("Your account is suspended")

        rec = await self.session.get(Recommendation, recommendation_id)
        if rec is None or not rec.is_approved:
            raise NotFound("Recommendation not found")

        existing = await self.session.execute(
            select(Review.id).where(
                Review.user_id == author.id,
                Review.recommendation_id == recommendation_id,
            )
        )
        if existing.scalar_one_or_none() is not None:
            raise ValidationError("You have already reviewed this comic")

        review = Review(
            user_id=author.id,
            recommendation_id=recommendation_id,
            content=content,
            rating=rating,
            contains_spoilers=contains_spoilers,
        )
        self.session.add(review)
        await self.session.flush()
        await adjust_counters(self.session, rec, review_count=1)

        logger.info(
            "Review created",
            extra={"review_id": str(review.id), "recommendation_id": str(recommendation_id)},
        )
        return review

    async def edit(
        self,
        author: Profile,
        recommendation_id: uuid.UUID,
        review_id: uuid.UUID,
        content: str,
        rating: Optional[int] = None,
        contains_spoilers: bool = False,
    ) -> Review:
        review = await self._owned_review(author, recommendation_id, review_id)
        review.content = content
        review.rating = rating
        review.contains_spoilers = contains_spoilers
        review.is_edited = True
        review.edited_at = utcnow()
        await self.session.flush()
        return review

    async def delete(
        self,
        author: Profile,
        recommendation_id: uuid.UUID,
        review_id: uuid.UUID,
    ) -> None:
        review = await self._owned_review(author, recommendation_id, review_id)
        rec = await self.session.get(Recommendation, review.recommendation_id)
        await self.session.delete(review)
        await self.session.flush()
        if rec is not None and rec.review_count > 0:
            await adjust_counters(self.session, rec, review_count=-1)

    async def _owned_review(
        self,
        author: Profile,
        recommendation_id: uuid.UUID,
        review_id: uuid.UUID,
    ) -> Review:
        review = await self.session.get(Review, review_id)
        if review is None or review.recommendation_id != recommendation_id:
            raise NotFound("Review not found")
        if review.user_id != author.id:
            raise Forbidden("You can only change your own reviews")
        return review

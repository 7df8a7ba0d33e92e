"""
Recommendation endpoints: browse, submit, review, vote and save.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Query, status

from comichub.api.deps import ActiveUser, CurrentUser, DbSession
from comichub.catalog.engagement_service import EngagementService
from comichub.catalog.recommendation_service import RecommendationService
from comichub.catalog.review_service import ReviewService
from comichub.config import get_settings
from comichub.schemas.common import SuccessResponse
from comichub.schemas.recommendation import (
    RecommendationCreate,
    RecommendationEnvelope,
    RecommendationListResponse,
    RecommendationResponse,
    SaveResponse,
    RecommendationCollection,
    VoteRequest,
    VoteResponse,
)
from comichub.schemas.review import (
    ReviewCreate,
    ReviewEnvelope,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)

router = APIRouter()
settings = get_settings()


def _review_response(review, username: Optional[str] = None) -> ReviewResponse:
    response = ReviewResponse.model_validate(review)
    response.username = username
    return response


@router.post("", response_model=RecommendationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_recommendation(data: RecommendationCreate, user: ActiveUser, db: DbSession):
    """Submit a recommendation. Staff submissions skip the pending queue."""
    rec = await RecommendationService(db).create(user, data.model_dump(mode="json"))
    return RecommendationEnvelope(recommendation=RecommendationResponse.model_validate(rec))


@router.get("", response_model=RecommendationListResponse)
async def list_recommendations(
    db: DbSession,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.recommendations_page_size, ge=1, le=100),
    type: Optional[str] = Query(None),
    genre: Optional[str] = Query(None),
    sort: str = Query("score"),
):
    """Browse approved recommendations."""
    items, total, has_more = await RecommendationService(db).list_approved(
        page=page, limit=limit, type=type, genre=genre, sort=sort
    )
    return RecommendationListResponse(
        recommendations=[RecommendationResponse.model_validate(r) for r in items],
        total=total,
        page=page,
        limit=limit,
        has_more=has_more,
    )


@router.get("/mine", response_model=RecommendationCollection)
async def my_recommendations(user: CurrentUser, db: DbSession):
    """The caller's own submissions in every moderation state."""
    items = await RecommendationService(db).list_by_author(user.id)
    return RecommendationCollection(
        recommendations=[RecommendationResponse.model_validate(r) for r in items]
    )


@router.get("/{recommendation_id}", response_model=RecommendationEnvelope)
async def get_recommendation(recommendation_id: uuid.UUID, db: DbSession):
    rec = await RecommendationService(db).get_approved(recommendation_id)
    return RecommendationEnvelope(recommendation=RecommendationResponse.model_validate(rec))


@router.get("/{recommendation_id}/reviews", response_model=ReviewListResponse)
async def list_reviews(
    recommendation_id: uuid.UUID,
    db: DbSession,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    rows, total, has_more = await ReviewService(db).list_visible(
        recommendation_id, limit=limit, offset=offset
    )
    return ReviewListResponse(
        reviews=[_review_response(review, username) for review, username in rows],
        total=total,
        has_more=has_more,
    )


@router.post(
    "/{recommendation_id}/reviews",
    response_model=ReviewEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_review(
    recommendation_id: uuid.UUID,
    data: ReviewCreate,
    user: ActiveUser,
    db: DbSession,
):
    review = await ReviewService(db).create(
        user,
        recommendation_id,
        content=data.content,
        rating=data.rating,
        contains_spoilers=data.contains_spoilers,
    )
    return ReviewEnvelope(review=_review_response(review, user.username))


@router.patch("/{recommendation_id}/reviews/{review_id}", response_model=ReviewEnvelope)
async def edit_review(
    recommendation_id: uuid.UUID,
    review_id: uuid.UUID,
    data: ReviewUpdate,
    user: ActiveUser,
    db: DbSession,
):
    review = await ReviewService(db).edit(
        user,
        recommendation_id,
        review_id,
        content=data.content,
        rating=data.rating,
        contains_spoilers=data.contains_spoilers,
    )
    return ReviewEnvelope(review=_review_response(review, user.username))


@router.delete("/{recommendation_id}/reviews/{review_id}", response_model=SuccessResponse)
async def delete_review(
    recommendation_id: uuid.UUID,
    review_id: uuid.UUID,
    user: CurrentUser,
    db: DbSession,
):
    await ReviewService(db).delete(user, recommendation_id, review_id)
    return SuccessResponse()


@router.post("/{recommendation_id}/vote", response_model=VoteResponse)
async def vote(
    recommendation_id: uuid.UUID,
    data: VoteRequest,
    user: ActiveUser,
    db: DbSession,
):
    """Vote up or down. Repeating the same vote removes it."""
    rec, current = await EngagementService(db).vote(user, recommendation_id, data.vote_type)
    return VoteResponse(
        upvotes=rec.upvotes,
        downvotes=rec.downvotes,
        score=rec.score,
        user_vote=current,
    )


@router.post("/{recommendation_id}/save", response_model=SaveResponse)
async def toggle_save(recommendation_id: uuid.UUID, user: ActiveUser, db: DbSession):
    rec, saved = await EngagementService(db).toggle_save(user, recommendation_id)
    return SaveResponse(saved=saved, save_count=rec.save_count)

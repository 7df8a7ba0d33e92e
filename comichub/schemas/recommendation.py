"""
Recommendation schemas.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from comichub.config import get_settings
from comichub.kernel.models.profile import AppealStatus
from comichub.kernel.models.recommendation import ComicType, ContentRating, PublicationStatus


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class RecommendationCreate(BaseModel):
    """Recommendation submission."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=10, max_length=2000)
    type: ComicType
    status: PublicationStatus
    genres: List[str] = Field(..., min_length=1)
    official_platforms: List[str] = Field(..., min_length=1)
    cover_url: Optional[str] = None
    content_rating: ContentRating = ContentRating.ALL
    why_recommend: Optional[str] = Field(None, max_length=1000)
    author: Optional[str] = Field(None, max_length=100)
    artist: Optional[str] = Field(None, max_length=100)
    year_released: Optional[int] = None
    chapter_count: Optional[int] = Field(None, ge=1)

    @field_validator(
        "cover_url", "why_recommend", "author", "artist", "year_released", "chapter_count",
        mode="before",
    )
    @classmethod
    def empty_as_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("genres")
    @classmethod
    def validate_genres(cls, v: List[str]) -> List[str]:
        limit = get_settings().max_genres_per_comic
        if len(v) > limit:
            raise ValueError(f"At most {limit} genres are allowed")
        return v

    @field_validator("year_released")
    @classmethod
    def validate_year(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        latest = datetime.now(timezone.utc).year + 1
        if v < 1900 or v > latest:
            raise ValueError(f"year_released must be between 1900 and {latest}")
        return v


class RecommendationResponse(BaseModel):
    """Recommendation as shown to its author, the public and staff."""

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: str
    type: ComicType
    status: PublicationStatus
    genres: List[str]
    official_platforms: List[str]
    content_rating: ContentRating
    cover_url: Optional[str] = None
    why_recommend: Optional[str] = None
    author: Optional[str] = None
    artist: Optional[str] = None
    year_released: Optional[int] = None
    chapter_count: Optional[int] = None
    upvotes: int
    downvotes: int
    score: int
    save_count: int
    review_count: int
    is_approved: bool
    rejection_reason: Optional[str] = None
    rejected_at: Optional[datetime] = None
    is_featured: bool
    featured_at: Optional[datetime] = None
    appeal_status: AppealStatus
    appeal_text: Optional[str] = None
    appeal_submitted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RecommendationEnvelope(BaseModel):
    recommendation: RecommendationResponse


class RecommendationListResponse(BaseModel):
    recommendations: List[RecommendationResponse]
    total: int
    page: int
    limit: int
    has_more: bool = Field(False, alias="hasMore")

    class Config:
        populate_by_name = True


class VoteRequest(BaseModel):
    vote_type: str = Field(..., pattern=r"^(up|down)$")


class VoteResponse(BaseModel):
    upvotes: int
    downvotes: int
    score: int
    user_vote: Optional[str] = None


class SaveResponse(BaseModel):
    saved: bool
    save_count: int


class RecommendationCollection(BaseModel):
    recommendations: List[RecommendationResponse]

"""
Review schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    content: str = Field(..., min_length=3, max_length=1000)
    rating: Optional[int] = Field(None, ge=1, le=5)
    contains_spoilers: bool = False


class ReviewUpdate(ReviewCreate):
    pass


class ReviewResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    recommendation_id: uuid.UUID
    username: Optional[str] = None
    content: str
    rating: Optional[int] = None
    contains_spoilers: bool
    is_approved: bool
    is_edited: bool
    edited_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReviewEnvelope(BaseModel):
    review: ReviewResponse


class ReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]
    total: int
    has_more: bool = Field(False, alias="hasMore")

    class Config:
        populate_by_name = True

"""
News schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, HttpUrl

from comichub.kernel.models.news import NewsCategory


class NewsCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    excerpt: str = Field(..., min_length=10, max_length=500)
    content: Optional[str] = None
    source_name: str = Field(..., min_length=1)
    source_url: HttpUrl
    category: NewsCategory
    cover_url: Optional[str] = None
    is_affiliate: bool = False
    affiliate_url: Optional[str] = None
    affiliate_disclaimer: str = ""
    tags: List[str] = Field(default_factory=list)
    is_published: bool = False


class NewsUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    excerpt: Optional[str] = Field(None, min_length=10, max_length=500)
    content: Optional[str] = None
    source_name: Optional[str] = Field(None, min_length=1)
    source_url: Optional[HttpUrl] = None
    category: Optional[NewsCategory] = None
    cover_url: Optional[str] = None
    is_affiliate: Optional[bool] = None
    affiliate_url: Optional[str] = None
    affiliate_disclaimer: Optional[str] = None
    tags: Optional[List[str]] = None
    is_published: Optional[bool] = None


class NewsResponse(BaseModel):
    id: uuid.UUID
    title: str
    slug: str
    excerpt: str
    content: Optional[str] = None
    source_name: str
    source_url: str
    category: NewsCategory
    tags: List[str]
    cover_url: Optional[str] = None
    is_affiliate: bool
    affiliate_url: Optional[str] = None
    affiliate_disclaimer: str
    view_count: int
    is_published: bool
    published_by: Optional[uuid.UUID] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class NewsEnvelope(BaseModel):
    news: NewsResponse


class NewsListResponse(BaseModel):
    news: List[NewsResponse]
    total: int
    page: int
    has_more: bool = Field(False, alias="hasMore")

    class Config:
        populate_by_name = True

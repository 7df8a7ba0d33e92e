"""
News endpoints. Reading is public; writing is staff only.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Query, status

from comichub.api.deps import DbSession, StaffUser
from comichub.config import get_settings
from comichub.news.news_service import NewsService
from comichub.schemas.common import SuccessResponse
from comichub.schemas.news import (
    NewsCreate,
    NewsEnvelope,
    NewsListResponse,
    NewsResponse,
    NewsUpdate,
)

router = APIRouter()
settings = get_settings()


@router.get("", response_model=NewsListResponse)
async def list_news(
    db: DbSession,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.news_page_size, ge=1, le=100),
    category: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
):
    items, total, has_more = await NewsService(db).list_published(
        page=page, limit=limit, category=category, q=q
    )
    return NewsListResponse(
        news=[NewsResponse.model_validate(n) for n in items],
        total=total,
        page=page,
        has_more=has_more,
    )


@router.get("/{id_or_slug}", response_model=NewsEnvelope)
async def get_news(id_or_slug: str, db: DbSession):
    """A published article by id or slug; counts the view."""
    article = await NewsService(db).get_published(id_or_slug)
    return NewsEnvelope(news=NewsResponse.model_validate(article))


@router.post("", response_model=NewsEnvelope, status_code=status.HTTP_201_CREATED)
async def create_news(data: NewsCreate, user: StaffUser, db: DbSession):
    article = await NewsService(db).create(user, data.model_dump(mode="json"))
    return NewsEnvelope(news=NewsResponse.model_validate(article))


@router.patch("/{news_id}", response_model=NewsEnvelope)
async def update_news(news_id: uuid.UUID, data: NewsUpdate, user: StaffUser, db: DbSession):
    article = await NewsService(db).update(
        user, news_id, data.model_dump(mode="json", exclude_unset=True)
    )
    return NewsEnvelope(news=NewsResponse.model_validate(article))


@router.delete("/{news_id}", response_model=SuccessResponse)
async def delete_news(news_id: uuid.UUID, user: StaffUser, db: DbSession):
    await NewsService(db).delete(user, news_id)
    return SuccessResponse()

"""
Staff-curated news articles.
"""

import re
import time
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.errors import NotFound, ValidationError
from comichub.kernel.models.base import utcnow
from comichub.kernel.models.news import News, NewsCategory
from comichub.kernel.models.profile import Profile
from comichub.logging_config import get_logger
from comichub.moderation.moderation_service import require_staff

logger = get_logger(__name__)

_NON_SLUG = re.compile(r"[^a-z0-9]+")

# Columns a PATCH may touch; everything else is derived
UPDATABLE_FIELDS = frozenset({
    "title",
    "excerpt",
    "content",
    "source_name",
    "source_url",
    "category",
    "tags",
    "cover_url",
    "is_affiliate",
    "affiliate_url",
    "affiliate_disclaimer",
    "is_published",
})


def slugify(title: str, now_ms: Optional[int] = None) -> str:
    """Lower-case, dash-separated title followed by an epoch-millisecond suffix."""
    base = _NON_SLUG.sub("-", title.lower()).strip("-")
    suffix = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{base}-{suffix}" if base else str(suffix)


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


class NewsService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_published(
        self,
        page: int = 1,
        limit: int = 12,
        category: Optional[str] = None,
        q: Optional[str] = None,
    ) -> Tuple[List[News], int, bool]:
        """Published articles, newest publication first."""
        query = select(News).where(News.is_published.is_(True))
        if category:
            try:
                query = query.where(News.category == NewsCategory(category).value)
            except ValueError:
                raise ValidationError(f"Unknown news category: {category}")
        if q and q.strip():
            query = query.where(News.title.ilike(f"%{q.strip()}%"))

        page = max(page, 1)
        offset = (page - 1) * limit
        result = await self.session.execute(
            query.order_by(desc(News.published_at), desc(News.created_at))
            .offset(offset)
            .limit(limit)
        )
        items = list(result.scalars().all())

        count_result = await self.session.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar() or 0
        return items, total, total > offset + limit

    async def get_published(self, id_or_slug: str) -> News:
        """Fetch by id or slug and count the view."""
        article_id = _parse_uuid(id_or_slug)
        if article_id is not None:
            query = select(News).where(News.id == article_id)
        else:
            query = select(News).where(News.slug == id_or_slug)

        result = await self.session.execute(query.where(News.is_published.is_(True)))
        article = result.scalar_one_or_none()
        if article is None:
            raise NotFound("Article not found")

        article.view_count = (article.view_count or 0) + 1
        await self.session.flush()
        return article

    async def create(self, actor: Optional[Profile], data: Dict[str, Any]) -> News:
        actor = require_staff(actor)
        is_published = bool(data.pop("is_published", False))

        article = News(
            **data,
            slug=slugify(data["title"]),
            published_by=actor.id,
            is_published=is_published,
            published_at=utcnow() if is_published else None,
        )
        self.session.add(article)
        await self.session.flush()

        logger.info(
            "News article created",
            extra={"news_id": str(article.id), "published": is_published},
        )
        return article

    async def update(
        self,
        actor: Optional[Profile],
        article_id: uuid.UUID,
        changes: Dict[str, Any],
    ) -> News:
        require_staff(actor)
        article = await self._load(article_id)

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            setattr(article, name, value)

        if "is_published" in changes:
            if changes["is_published"]:
                article.published_at = utcnow()
            else:
                article.published_at = None

        await self.session.flush()
        return article

    async def delete(self, actor: Optional[Profile], article_id: uuid.UUID) -> None:
        require_staff(actor)
        article = await self._load(article_id)
        await self.session.delete(article)
        await self.session.flush()
        logger.info("News article deleted", extra={"news_id": str(article_id)})

    async def _load(self, article_id: uuid.UUID) -> News:
        article = await self.session.get(News, article_id)
        if article is None:
            raise NotFound("Article not found")
        return article

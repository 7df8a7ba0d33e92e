"""Unit tests for staff-curated news."""

import uuid

import pytest

from comichub.kernel.errors import Forbidden, NotFound, ValidationError
from comichub.kernel.models import News
from comichub.news.news_service import NewsService, slugify


def _article(**overrides):
    data = dict(
        title="Chainsaw Man Part 2 returns",
        excerpt="The series resumes next month.",
        source_name="Shonen Jump",
        source_url="https://example.com/csm",
        category="release",
        tags=["chainsaw-man"],
    )
    data.update(overrides)
    return data


class TestSlugify:

    def test_lowercases_and_dashes(self):
        assert slugify("Chainsaw Man: Part 2!", now_ms=1700000000000) == "chainsaw-man-part-2-1700000000000"

    def test_title_without_letters_or_digits(self):
        assert slugify("!!!", now_ms=42) == "42"

    def test_suffix_defaults_to_current_time(self):
        slug = slugify("Hello")
        assert slug.startswith("hello-")
        assert slug.split("-")[-1].isdigit()


class TestNewsService:

    @pytest.mark.asyncio
    async def test_create_draft(self, db_session, moderator):
        article = await NewsService(db_session).create(moderator, _article())

        assert article.is_published is False
        assert article.published_at is None
        assert article.published_by == moderator.id
        assert article.slug.startswith("chainsaw-man-part-2-returns-")

    @pytest.mark.asyncio
    async def test_create_requires_staff(self, db_session, member):
        with pytest.raises(Forbidden):
            await NewsService(db_session).create(member, _article())

    @pytest.mark.asyncio
    async def test_publish_and_unpublish(self, db_session, admin):
        service = NewsService(db_session)
        article = await service.create(admin, _article())

        published = await service.update(admin, article.id, {"is_published": True})
        assert published.is_published is True
        assert published.published_at is not None

        draft = await service.update(admin, article.id, {"is_published": False, "title": "Delayed"})
        assert draft.is_published is False
        assert draft.published_at is None
        assert draft.title == "Delayed"

    @pytest.mark.asyncio
    async def test_update_rejects_derived_fields(self, db_session, admin):
        service = NewsService(db_session)
        article = await service.create(admin, _article())
        with pytest.raises(ValidationError):
            await service.update(admin, article.id, {"view_count": 1000})

    @pytest.mark.asyncio
    async def test_read_counts_views(self, db_session, moderator):
        service = NewsService(db_session)
        article = await service.create(moderator, _article(is_published=True))

        by_slug = await service.get_published(article.slug)
        by_id = await service.get_published(str(article.id))

        assert by_slug.id == by_id.id == article.id
        assert article.view_count == 2

    @pytest.mark.asyncio
    async def test_drafts_are_hidden(self, db_session, moderator):
        service = NewsService(db_session)
        draft = await service.create(moderator, _article())

        with pytest.raises(NotFound):
            await service.get_published(draft.slug)
        items, total, _ = await service.list_published()
        assert items == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_list_filters(self, db_session, moderator):
        service = NewsService(db_session)
        release = await service.create(moderator, _article(is_published=True))
        await service.create(
            moderator,
            _article(title="Anime adaptation announced", category="adaptation", is_published=True),
        )

        releases, total, _ = await service.list_published(category="release")
        assert [a.id for a in releases] == [release.id]
        assert total == 1

        found, _, _ = await service.list_published(q="ANIME")
        assert [a.title for a in found] == ["Anime adaptation announced"]

        with pytest.raises(ValidationError):
            await service.list_published(category="gossip")

    @pytest.mark.asyncio
    async def test_delete(self, db_session, admin):
        service = NewsService(db_session)
        article = await service.create(admin, _article())

        await service.delete(admin, article.id)
        assert await db_session.get(News, article.id) is None

        with pytest.raises(NotFound):
            await service.delete(admin, uuid.uuid4())

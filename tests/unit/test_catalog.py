"""Unit tests for the member-facing catalog services."""

import uuid

import pytest

from comichub.catalog import EngagementService, RecommendationService, ReportService, ReviewService
from comichub.database import async_session_maker
from comichub.kernel.errors import Forbidden, NotFound, ValidationError
from comichub.kernel.models import ComicType, Review, VoteType
from comichub.kernel.models.base import enum_value

from tests.factories import make_profile, make_recommendation


def _submission(**overrides):
    data = dict(
        title="Monster",
        description="A surgeon hunts the boy he once saved.",
        type=ComicType.MANGA,
        status="completed",
        genres=["thriller", "mystery"],
        official_platforms=["VIZ"],
        content_rating="mature",
    )
    data.update(overrides)
    return data


class TestRecommendationService:

    @pytest.mark.asyncio
    async def test_member_submission_waits_for_review(self, db_session, member):
        rec = await RecommendationService(db_session).create(member, _submission())
        assert rec.is_approved is False
        assert rec.user_id == member.id

    @pytest.mark.asyncio
    async def test_staff_submission_is_approved(self, db_session, moderator):
        rec = await RecommendationService(db_session).create(moderator, _submission())
        assert rec.is_approved is True

    @pytest.mark.asyncio
    async def test_banned_member_cannot_submit(self, db_session):
        banned = await make_profile(db_session, "banned_bea", is_banned=True, ban_reason="spam")
        with pytest.raises(Forbidden):
            await RecommendationService(db_session).create(banned, _submission())

    @pytest.mark.asyncio
    async def test_list_only_shows_approved(self, db_session, pending_recommendation, approved_recommendation):
        items, total, has_more = await RecommendationService(db_session).list_approved()
        assert [r.id for r in items] == [approved_recommendation.id]
        assert total == 1
        assert has_more is False

    @pytest.mark.asyncio
    async def test_sort_and_filters(self, db_session, member):
        low = await make_recommendation(
            db_session, member, title="Low", is_approved=True, score=1, upvotes=5, downvotes=4
        )
        high = await make_recommendation(
            db_session, member, title="High", is_approved=True, score=3, upvotes=3, downvotes=0,
            type=ComicType.WEBTOON, genres=["romance"],
        )
        service = RecommendationService(db_session)

        by_score, _, _ = await service.list_approved(sort="score")
        assert [r.id for r in by_score] == [high.id, low.id]

        trending, _, _ = await service.list_approved(sort="trending")
        assert [r.id for r in trending] == [low.id, high.id]

        recent, _, _ = await service.list_approved(sort="recent")
        assert [r.id for r in recent] == [high.id, low.id]

        webtoons, total, _ = await service.list_approved(type="webtoon")
        assert [r.id for r in webtoons] == [high.id]
        assert total == 1

        romance, total, _ = await service.list_approved(genre="romance")
        assert [r.id for r in romance] == [high.id]
        assert total == 1

    @pytest.mark.asyncio
    async def test_invalid_sort_and_type(self, db_session):
        service = RecommendationService(db_session)
        with pytest.raises(ValidationError):
            await service.list_approved(sort="random")
        with pytest.raises(ValidationError):
            await service.list_approved(type="novel")

    @pytest.mark.asyncio
    async def test_pending_is_not_publicly_visible(self, db_session, pending_recommendation):
        with pytest.raises(NotFound):
            await RecommendationService(db_session).get_approved(pending_recommendation.id)

    @pytest.mark.asyncio
    async def test_author_sees_all_own_submissions(
        self, db_session, member, pending_recommendation, approved_recommendation
    ):
        mine = await RecommendationService(db_session).list_by_author(member.id)
        assert {r.id for r in mine} == {pending_recommendation.id, approved_recommendation.id}


class TestVotesAndSaves:

    @pytest.mark.asyncio
    async def test_vote_switch_and_remove(self, db_session, other_member, approved_recommendation):
        service = EngagementService(db_session)

        rec, current = await service.vote(other_member, approved_recommendation.id, VoteType.UP)
        assert (rec.upvotes, rec.downvotes, rec.score, current) == (1, 0, 1, "up")

        rec, current = await service.vote(other_member, approved_recommendation.id, "down")
        assert (rec.upvotes, rec.downvotes, rec.score, current) == (0, 1, -1, "down")

        rec, current = await service.vote(other_member, approved_recommendation.id, "down")
        assert (rec.upvotes, rec.downvotes, rec.score, current) == (0, 0, 0, None)

    @pytest.mark.asyncio
    async def test_cannot_vote_on_pending(self, db_session, other_member, pending_recommendation):
        with pytest.raises(NotFound):
            await EngagementService(db_session).vote(other_member, pending_recommendation.id, "up")

    @pytest.mark.asyncio
    async def test_save_toggle_and_list(self, db_session, other_member, approved_recommendation):
        service = EngagementService(db_session)

        rec, saved = await service.toggle_save(other_member, approved_recommendation.id)
        assert saved is True
        assert rec.save_count == 1
        assert [r.id for r in await service.list_saved(other_member)] == [approved_recommendation.id]

        rec, saved = await service.toggle_save(other_member, approved_recommendation.id)
        assert saved is False
        assert rec.save_count == 0
        assert await service.list_saved(other_member) == []

    @pytest.mark.asyncio
    async def test_interleaved_votes_both_count(self, db_session, member, other_member, approved_recommendation):
        # db_session still holds the recommendation as loaded before the other vote
        async with async_session_maker() as other:
            await EngagementService(other).vote(other_member, approved_recommendation.id, "up")
            await other.commit()

        rec, current = await EngagementService(db_session).vote(member, approved_recommendation.id, "up")
        await db_session.commit()

        assert current == "up"
        assert (rec.upvotes, rec.downvotes, rec.score) == (2, 0, 2)

    @pytest.mark.asyncio
    async def test_interleaved_saves_both_count(self, db_session, member, other_member, approved_recommendation):
        async with async_session_maker() as other:
            await EngagementService(other).toggle_save(other_member, approved_recommendation.id)
            await other.commit()

        rec, saved = await EngagementService(db_session).toggle_save(member, approved_recommendation.id)
        await db_session.commit()

        assert saved is True
        assert rec.save_count == 2

    @pytest.mark.asyncio
    async def test_banned_member_cannot_vote(self, db_session, approved_recommendation):
        banned = await make_profile(db_session, "banned_bea", is_banned=True, ban_reason="spam")
        with pytest.raises(Forbidden):
            await EngagementService(db_session).vote(banned, approved_recommendation.id, "up")


class TestReviews:

    @pytest.mark.asyncio
    async def test_create_and_list(self, db_session, member, approved_recommendation):
        service = ReviewService(db_session)
        review = await service.create(member, approved_recommendation.id, "Painfully relatable.", rating=5)

        assert approved_recommendation.review_count == 1
        rows, total, has_more = await service.list_visible(approved_recommendation.id)
        assert [(r.id, username) for r, username in rows] == [(review.id, "reader")]
        assert total == 1
        assert has_more is False

    @pytest.mark.asyncio
    async def test_one_review_per_member(self, db_session, other_member, review, approved_recommendation):
        with pytest.raises(ValidationError):
            await ReviewService(db_session).create(other_member, approved_recommendation.id, "Again!")

    @pytest.mark.asyncio
    async def test_hidden_reviews_are_not_listed(self, db_session, review, approved_recommendation):
        review.is_approved = False
        await db_session.commit()

        rows, total, _ = await ReviewService(db_session).list_visible(approved_recommendation.id)
        assert rows == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_edit_own_review(self, db_session, other_member, review, approved_recommendation):
        edited = await ReviewService(db_session).edit(
            other_member, approved_recommendation.id, review.id, "Better on reread.", rating=5
        )
        assert edited.content == "Better on reread."
        assert edited.is_edited is True
        assert edited.edited_at is not None

    @pytest.mark.asyncio
    async def test_cannot_touch_someone_elses_review(self, db_session, member, review, approved_recommendation):
        service = ReviewService(db_session)
        with pytest.raises(Forbidden):
            await service.edit(member, approved_recommendation.id, review.id, "Hijacked")
        with pytest.raises(Forbidden):
            await service.delete(member, approved_recommendation.id, review.id)

    @pytest.mark.asyncio
    async def test_delete_own_review(self, db_session, other_member, review, approved_recommendation):
        await ReviewService(db_session).delete(other_member, approved_recommendation.id, review.id)
        assert await db_session.get(Review, review.id) is None
        assert approved_recommendation.review_count == 0

    @pytest.mark.asyncio
    async def test_review_must_belong_to_recommendation(self, db_session, other_member, review):
        with pytest.raises(NotFound):
            await ReviewService(db_session).delete(other_member, uuid.uuid4(), review.id)


class TestReports:

    @pytest.mark.asyncio
    async def test_file_report(self, db_session, other_member, approved_recommendation):
        report = await ReportService(db_session).create(
            other_member, "recommendation", approved_recommendation.id, " Spoilers in title ", "details"
        )
        assert report.reason == "Spoilers in title"
        assert enum_value(report.status) == "pending"
        assert report.reporter_id == other_member.id

    @pytest.mark.asyncio
    async def test_report_checks(self, db_session, member, other_member):
        service = ReportService(db_session)
        with pytest.raises(ValidationError):
            await service.create(member, "comment", other_member.id, "spam")
        with pytest.raises(ValidationError):
            await service.create(member, "user", other_member.id, "   ")
        with pytest.raises(NotFound):
            await service.create(member, "review", uuid.uuid4(), "spam")

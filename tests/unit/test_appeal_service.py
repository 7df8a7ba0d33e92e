"""Unit tests for appeal submission."""

import uuid

import pytest
import pytest_asyncio

from comichub.kernel.errors import ConflictError, Forbidden, NotFound, Unauthorized, ValidationError
from comichub.kernel.events.audit_log import AuditLog
from comichub.kernel.models import AppealStatus
from comichub.kernel.models.base import enum_value, utcnow
from comichub.moderation.appeal_service import AppealKind, AppealService

from tests.factories import make_profile, make_recommendation


@pytest_asyncio.fixture
async def rejected_recommendation(db_session, member):
    return await make_recommendation(
        db_session,
        member,
        title="Berserk",
        rejection_reason="duplicate",
        rejected_at=utcnow(),
    )


@pytest_asyncio.fixture
async def banned_member(db_session):
    return await make_profile(
        db_session,
        "banned_bea",
        is_banned=True,
        ban_reason="spam",
        banned_at=utcnow(),
    )


class TestRecommendationAppeal:

    @pytest.mark.asyncio
    async def test_owner_appeals_rejection(self, db_session, member, rejected_recommendation):
        target = await AppealService(db_session).submit(
            member, AppealKind.RECOMMENDATION, rejected_recommendation.id, "  It is not a duplicate.  "
        )

        assert target is rejected_recommendation
        assert enum_value(target.appeal_status) == "pending"
        assert target.appeal_text == "It is not a duplicate."
        assert target.appeal_submitted_at is not None
        assert await AuditLog(db_session).count() == 0

    @pytest.mark.asyncio
    async def test_blank_text_changes_nothing(self, db_session, member, rejected_recommendation):
        with pytest.raises(ValidationError):
            await AppealService(db_session).submit(
                member, "recommendation", rejected_recommendation.id, "   "
            )

        assert enum_value(rejected_recommendation.appeal_status) == "none"
        assert rejected_recommendation.appeal_text is None
        assert await AuditLog(db_session).count() == 0

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(self, db_session, other_member, rejected_recommendation):
        with pytest.raises(Forbidden):
            await AppealService(db_session).submit(
                other_member, "recommendation", rejected_recommendation.id, "Please reconsider"
            )

        assert enum_value(rejected_recommendation.appeal_status) == "none"

    @pytest.mark.asyncio
    async def test_second_appeal_in_same_cycle_conflicts(self, db_session, member, rejected_recommendation):
        service = AppealService(db_session)
        await service.submit(member, "recommendation", rejected_recommendation.id, "First try")

        with pytest.raises(ConflictError):
            await service.submit(member, "recommendation", rejected_recommendation.id, "Second try")
        assert rejected_recommendation.appeal_text == "First try"

    @pytest.mark.asyncio
    async def test_resolved_appeal_cannot_be_reopened(self, db_session, member):
        rec = await make_recommendation(
            db_session,
            member,
            rejection_reason="duplicate",
            appeal_status=AppealStatus.REJECTED,
        )
        with pytest.raises(ConflictError):
            await AppealService(db_session).submit(member, "recommendation", rec.id, "Again")

    @pytest.mark.asyncio
    async def test_pending_recommendation_is_not_appealable(self, db_session, member, pending_recommendation):
        with pytest.raises(ConflictError):
            await AppealService(db_session).submit(
                member, "recommendation", pending_recommendation.id, "Please"
            )

    @pytest.mark.asyncio
    async def test_unknown_recommendation(self, db_session, member):
        with pytest.raises(NotFound):
            await AppealService(db_session).submit(member, "recommendation", uuid.uuid4(), "Please")

    @pytest.mark.asyncio
    async def test_recommendation_appeal_needs_target(self, db_session, member):
        with pytest.raises(ValidationError):
            await AppealService(db_session).submit(member, "recommendation", None, "Please")


class TestBanAppeal:

    @pytest.mark.asyncio
    async def test_banned_user_appeals(self, db_session, banned_member):
        target = await AppealService(db_session).submit(banned_member, "ban", None, "I was hacked")

        assert target is banned_member
        assert enum_value(banned_member.appeal_status) == "pending"
        assert banned_member.appeal_text == "I was hacked"
        assert banned_member.is_banned is True

    @pytest.mark.asyncio
    async def test_cannot_appeal_someone_elses_ban(self, db_session, banned_member, member):
        with pytest.raises(Forbidden):
            await AppealService(db_session).submit(banned_member, "ban", member.id, "Unban them")

    @pytest.mark.asyncio
    async def test_unbanned_user_has_nothing_to_appeal(self, db_session, member):
        with pytest.raises(Forbidden):
            await AppealService(db_session).submit(member, "ban", None, "Hello")
        assert enum_value(member.appeal_status) == "none"


class TestInputChecks:

    @pytest.mark.asyncio
    async def test_missing_actor(self, db_session, rejected_recommendation):
        with pytest.raises(Unauthorized):
            await AppealService(db_session).submit(
                None, "recommendation", rejected_recommendation.id, "Please"
            )

    @pytest.mark.asyncio
    async def test_unknown_kind(self, db_session, member):
        with pytest.raises(ValidationError):
            await AppealService(db_session).submit(member, "review", uuid.uuid4(), "Please")

"""Unit tests for best-effort notification delivery."""

import uuid

import pytest

from comichub.kernel.models import Recommendation
from comichub.kernel.notifications.notification_service import NotificationService

from tests.factories import fetch


class TestNotificationService:

    @pytest.mark.asyncio
    async def test_notify_and_list(self, db_session, member):
        service = NotificationService(db_session)
        first = await service.notify(member.id, "account_ban", "Suspended", {"reason": "spam"})
        second = await service.notify(member.id, "account_unban", "Lifted")

        assert first is not None
        assert second.data == {}
        listed = await service.list_for_user(member.id)
        assert {n.type for n in listed} == {"account_ban", "account_unban"}

    @pytest.mark.asyncio
    async def test_failed_insert_leaves_outer_work_intact(self, db_session, approved_recommendation):
        approved_recommendation.title = "Blue Period (Deluxe)"
        await db_session.flush()

        result = await NotificationService(db_session).notify(
            uuid.uuid4(), "recommendation_approve", "Nobody home"
        )
        assert result is None

        await db_session.commit()
        stored = await fetch(Recommendation, approved_recommendation.id)
        assert stored.title == "Blue Period (Deluxe)"

    @pytest.mark.asyncio
    async def test_mark_all_read(self, db_session, member, other_member):
        service = NotificationService(db_session)
        await service.notify(member.id, "account_ban", "One")
        await service.notify(member.id, "account_unban", "Two")
        await service.notify(other_member.id, "account_ban", "Elsewhere")
        await db_session.commit()

        assert await service.mark_all_read(member.id) == 2
        assert await service.mark_all_read(member.id) == 0
        await db_session.commit()

        mine = await service.list_for_user(member.id)
        assert all(n.is_read for n in mine)
        theirs = await service.list_for_user(other_member.id)
        assert [n.is_read for n in theirs] == [False]

"""Unit tests for the append-only audit log."""

import uuid
from enum import Enum

import pytest

from comichub.kernel.events.audit_log import AuditLog
from comichub.kernel.models.activity_log import AuditEntityType


class _Colour(str, Enum):
    RED = "red"


@pytest.mark.asyncio
async def test_append_serializes_details(db_session, moderator):
    audit_log = AuditLog(db_session)
    target = uuid.uuid4()

    entry = await audit_log.append(
        actor_id=moderator.id,
        action="banned user",
        entity_type=AuditEntityType.USER,
        entity_id=target,
        target_label="spammer",
        details={"reason": "spam", "by": moderator.id, "colour": _Colour.RED, "nested": {"ids": [target]}},
    )

    assert entry.id is not None
    assert entry.details == {
        "reason": "spam",
        "by": str(moderator.id),
        "colour": "red",
        "nested": {"ids": [str(target)]},
    }


@pytest.mark.asyncio
async def test_list_entries_newest_first_with_usernames(db_session, moderator):
    audit_log = AuditLog(db_session)
    target = uuid.uuid4()
    for action in ("approved recommendation", "featured recommendation", "unfeatured recommendation"):
        await audit_log.append(
            actor_id=moderator.id,
            action=action,
            entity_type=AuditEntityType.RECOMMENDATION,
            entity_id=target,
            target_label="Vagabond",
        )

    rows, total, has_more = await audit_log.list_entries(page=1, page_size=50)

    assert total == 3
    assert has_more is False
    assert [entry.action for entry, _ in rows] == [
        "unfeatured recommendation",
        "featured recommendation",
        "approved recommendation",
    ]
    assert all(username == moderator.username for _, username in rows)


@pytest.mark.asyncio
async def test_list_entries_pagination(db_session, moderator):
    audit_log = AuditLog(db_session)
    for i in range(5):
        await audit_log.append(
            actor_id=moderator.id,
            action="resolved report",
            entity_type=AuditEntityType.REPORT,
            entity_id=uuid.uuid4(),
            target_label=f"report-{i}",
        )

    first, total, has_more = await audit_log.list_entries(page=1, page_size=2)
    last, _, last_has_more = await audit_log.list_entries(page=3, page_size=2)

    assert total == 5
    assert len(first) == 2 and has_more is True
    assert len(last) == 1 and last_has_more is False
    assert last[0][0].target_label == "report-0"


@pytest.mark.asyncio
async def test_entity_history_and_count(db_session, moderator):
    audit_log = AuditLog(db_session)
    target = uuid.uuid4()
    other = uuid.uuid4()
    await audit_log.append(moderator.id, "rejected recommendation", AuditEntityType.RECOMMENDATION, target, "A")
    await audit_log.append(moderator.id, "approved recommendation", AuditEntityType.RECOMMENDATION, other, "B")
    await audit_log.append(moderator.id, "approved appeal for recommendation", AuditEntityType.RECOMMENDATION, target, "A")

    history = await audit_log.entity_history(AuditEntityType.RECOMMENDATION, target)

    assert [e.action for e in history] == [
        "rejected recommendation",
        "approved appeal for recommendation",
    ]
    assert await audit_log.count(entity_id=target) == 2
    assert await audit_log.count() == 3


def test_no_mutation_api():
    assert not hasattr(AuditLog, "update")
    assert not hasattr(AuditLog, "delete")

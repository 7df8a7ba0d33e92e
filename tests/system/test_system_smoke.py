"""
System smoke test: full API flows in-process with SQLite.

Covers health, the rejection -> appeal -> approval flow for a recommendation,
and the ban -> appeal -> rejection flow for an account, all over HTTP.
"""

import pytest
from httpx import AsyncClient

from tests.factories import TEST_PASSWORD


async def _login(client: AsyncClient, email: str) -> dict:
    response = await client.post("/api/auth/login", json={"email": email, "password": TEST_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def _find(recommendations, rec_id):
    return next(r for r in recommendations if r["id"] == rec_id)


@pytest.mark.asyncio
async def test_health(client: AsyncClient, db_engine):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_recommendation_rejection_appeal_flow(client: AsyncClient, member, moderator):
    owner = await _login(client, member.email)
    staff = await _login(client, moderator.email)

    # Submit: lands in the pending queue
    created = await client.post(
        "/api/recommendations",
        json={
            "title": "Dungeon Meshi",
            "description": "Adventurers cook the monsters they defeat.",
            "type": "manga",
            "status": "completed",
            "genres": ["fantasy", "comedy"],
            "official_platforms": ["Yen Press"],
            "author": "Ryoko Kui",
            "year_released": "",
        },
        headers=owner,
    )
    assert created.status_code == 201, created.text
    rec = created.json()["recommendation"]
    rec_id = rec["id"]
    assert rec["is_approved"] is False
    assert rec["year_released"] is None

    public = await client.get(f"/api/recommendations/{rec_id}")
    assert public.status_code == 404

    # Reject
    rejected = await client.patch(
        f"/api/admin/recommendations/{rec_id}",
        json={"action": "reject", "reason": "low quality"},
        headers=staff,
    )
    assert rejected.status_code == 200, rejected.text

    mine = await client.get("/api/recommendations/mine", headers=owner)
    state = _find(mine.json()["recommendations"], rec_id)
    assert state["is_approved"] is False
    assert state["rejection_reason"] == "low quality"

    # Appeal
    appeal = await client.post(
        "/api/appeals",
        json={"type": "recommendation", "target_id": rec_id, "appeal_text": "I fixed it"},
        headers=owner,
    )
    assert appeal.status_code == 200, appeal.text

    mine = await client.get("/api/recommendations/mine", headers=owner)
    state = _find(mine.json()["recommendations"], rec_id)
    assert state["appeal_status"] == "pending"
    assert state["appeal_text"] == "I fixed it"

    again = await client.post(
        "/api/appeals",
        json={"type": "recommendation", "target_id": rec_id, "appeal_text": "Please?"},
        headers=owner,
    )
    assert again.status_code == 409

    # Resolve the appeal in the owner's favour
    resolved = await client.patch(
        f"/api/admin/recommendations/{rec_id}",
        json={"action": "resolve_appeal", "appeal_status": "approved"},
        headers=staff,
    )
    assert resolved.status_code == 200, resolved.text

    public = await client.get(f"/api/recommendations/{rec_id}")
    assert public.status_code == 200
    body = public.json()["recommendation"]
    assert body["is_approved"] is True
    assert body["appeal_status"] == "approved"
    assert body["rejection_reason"] is None

    # Audit trail: the appeal submission itself is not a staff action
    logs = await client.get("/api/admin/logs", headers=staff)
    trail = [e for e in logs.json()["logs"] if e["target_id"] == rec_id]
    assert [e["details"]["action"] for e in reversed(trail)] == ["reject", "resolve_appeal"]

    notes = await client.get("/api/notifications", headers=owner)
    assert [n["type"] for n in notes.json()["notifications"]] == [
        "recommendation_resolve_appeal",
        "recommendation_reject",
    ]

    marked = await client.patch("/api/notifications", headers=owner)
    assert marked.json()["updated"] == 2


@pytest.mark.asyncio
async def test_ban_appeal_flow(client: AsyncClient, member, moderator):
    staff = await _login(client, moderator.email)

    banned = await client.patch(
        f"/api/admin/users/{member.id}",
        json={"action": "ban", "reason": "spam"},
        headers=staff,
    )
    assert banned.status_code == 200, banned.text

    # Banned accounts can still sign in, read notifications and appeal
    user = await _login(client, member.email)

    notes = await client.get("/api/notifications", headers=user)
    assert notes.status_code == 200
    [note] = notes.json()["notifications"]
    assert note["type"] == "account_ban"
    assert note["data"] == {"reason": "spam"}

    blank = await client.post("/api/appeals", json={"type": "ban", "appeal_text": "   "}, headers=user)
    assert blank.status_code == 400

    appeal = await client.post(
        "/api/appeals",
        json={"type": "ban", "appeal_text": "It was my little brother"},
        headers=user,
    )
    assert appeal.status_code == 200, appeal.text

    me = await client.get("/api/auth/me", headers=user)
    assert me.json()["appeal_status"] == "pending"

    resolved = await client.patch(
        f"/api/admin/users/{member.id}",
        json={"action": "resolve_appeal", "appeal_status": "rejected"},
        headers=staff,
    )
    assert resolved.status_code == 200, resolved.text

    me = await client.get("/api/auth/me", headers=user)
    assert me.json()["is_banned"] is True
    assert me.json()["appeal_status"] == "rejected"

    submit = await client.post(
        "/api/recommendations",
        json={
            "title": "Anything",
            "description": "Banned users cannot post this.",
            "type": "comic",
            "status": "ongoing",
            "genres": ["action"],
            "official_platforms": ["Webtoon"],
        },
        headers=user,
    )
    assert submit.status_code == 403

"""Tests for in-app notifications."""

import pytest
from httpx import AsyncClient

from zenith.crud.notification import notification_crud


async def _seed(db, user, count: int):
    ids = []
    for i in range(count):
        n = await notification_crud.notify(
            db,
            user_id=user.id,
            type="system",
            title=f"Notice {i}",
            message="Something happened",
            metadata={"n": i},
        )
        ids.append(n.id)
    return ids


@pytest.mark.asyncio
async def test_list_newest_first(client: AsyncClient, db_session, student, student_headers):
    await _seed(db_session, student, 3)

    data = (await client.get("/api/v1/notifications", headers=student_headers)).json()

    assert data["total"] == 3
    assert [n["title"] for n in data["items"]] == ["Notice 2", "Notice 1", "Notice 0"]
    assert data["items"][0]["metadata"] == {"n": 2}


@pytest.mark.asyncio
async def test_notifications_are_per_user(client: AsyncClient, db_session, student, other_headers):
    await _seed(db_session, student, 2)

    data = (await client.get("/api/v1/notifications", headers=other_headers)).json()

    assert data["total"] == 0


@pytest.mark.asyncio
async def test_mark_one_read(client: AsyncClient, db_session, student, student_headers):
    ids = await _seed(db_session, student, 2)

    response = await client.patch("/api/v1/notifications/read", json={"notification_id": ids[0]}, headers=student_headers)
    assert response.json() == {"updated": 1}

    count = (await client.get("/api/v1/notifications/unread-count", headers=student_headers)).json()
    assert count == {"unread": 1}

    unread = (await client.get("/api/v1/notifications", params={"unread_only": True}, headers=student_headers)).json()
    assert [n["id"] for n in unread["items"]] == [ids[1]]


@pytest.mark.asyncio
async def test_mark_all_read(client: AsyncClient, db_session, student, student_headers):
    await _seed(db_session, student, 3)

    response = await client.patch("/api/v1/notifications/read", json={"mark_all": True}, headers=student_headers)
    assert response.json() == {"updated": 3}

    # Already read: nothing left to update
    response = await client.patch("/api/v1/notifications/read", json={"mark_all": True}, headers=student_headers)
    assert response.json() == {"updated": 0}


@pytest.mark.asyncio
async def test_cannot_mark_someone_elses_notification(client: AsyncClient, db_session, student, other_headers):
    ids = await _seed(db_session, student, 1)

    response = await client.patch("/api/v1/notifications/read", json={"notification_id": ids[0]}, headers=other_headers)

    assert response.json() == {"updated": 0}


@pytest.mark.asyncio
async def test_read_request_needs_target(client: AsyncClient, student_headers):
    response = await client.patch("/api/v1/notifications/read", json={}, headers=student_headers)
    assert response.status_code == 422

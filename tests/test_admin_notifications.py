"""Tests for the admin notification panel and dashboard."""

import pytest
from httpx import AsyncClient
from unittest.mock import AsyncMock

from zenith.crud.product import product_crud
from zenith.models.product import ProductStatus
from zenith.models.support import SupportMessage, SupportPriority, SupportStatus
from zenith.services import admin_notifications
from zenith.services.admin_notifications import preview
from zenith.services.cache_service import cache, DASHBOARD_STATS_KEY


class TestPreview:
    """Support message previews."""

    def test_short_text_unchanged(self):
        assert preview("Cannot log in") == "Cannot log in"

    def test_exactly_limit_unchanged(self):
        text = "x" * 100
        assert preview(text) == text

    def test_long_text_truncated_with_ellipsis(self):
        text = "y" * 150
        assert preview(text) == "y" * 100 + "..."


async def _support(db, subject: str, priority: SupportPriority, status=SupportStatus.PENDING, body="Help me"):
    message = SupportMessage(
        name="Student",
        email="student@example.com",
        subject=subject,
        message=body,
        category="general",
        priority=priority,
        status=status,
    )
    db.add(message)
    await db.flush()
    return message


@pytest.mark.asyncio
async def test_requires_admin(client: AsyncClient, student_headers):
    response = await client.get("/api/v1/admin/notifications", headers=student_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_empty_panel(client: AsyncClient, admin_headers):
    response = await client.get("/api/v1/admin/notifications", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["pending_verifications"] == []
    assert data["pending_products"] == []
    assert data["support_messages"] == {"urgent": [], "high": [], "normal": [], "low": []}
    assert data["summary"]["total"] == 0


@pytest.mark.asyncio
async def test_aggregates_every_queue(client: AsyncClient, db_session, student, admin_headers, make_product):
    student.documents_uploaded = True
    student.student_card_url = "https://files.example.com/card.png"
    await db_session.flush()

    await make_product(student, title="Waiting Listing", status=ProductStatus.PENDING, price=99.5)
    await make_product(student, title="Live Listing")

    await _support(db_session, "Site down", SupportPriority.URGENT, body="z" * 120)
    await _support(db_session, "Refund", SupportPriority.HIGH)
    await _support(db_session, "Question", SupportPriority.NORMAL)
    await _support(db_session, "Question 2", SupportPriority.NORMAL)
    await _support(db_session, "Resolved", SupportPriority.LOW, status=SupportStatus.RESOLVED)

    response = await client.get("/api/v1/admin/notifications", headers=admin_headers)
    data = response.json()

    verification = data["pending_verifications"][0]
    assert verification["id"] == student.id
    assert verification["has_student_card"] is True
    assert verification["has_id_document"] is False

    assert len(data["pending_products"]) == 1
    pending = data["pending_products"][0]
    assert pending["title"] == "Waiting Listing"
    assert pending["seller_name"] == "Thandi Tester"
    assert pending["category"] == "Electronics"
    assert pending["price"] == 99.5

    buckets = data["support_messages"]
    assert [m["subject"] for m in buckets["urgent"]] == ["Site down"]
    assert buckets["urgent"][0]["preview"] == "z" * 100 + "..."
    assert len(buckets["normal"]) == 2
    assert buckets["low"] == []

    assert data["summary"] == {
        "pending_verifications": 1,
        "pending_products": 1,
        "support_messages": 4,
        "urgent": 1,
        "high": 1,
        "normal": 2,
        "low": 0,
        "total": 6,
    }


@pytest.mark.asyncio
async def test_support_queue_is_capped(client: AsyncClient, db_session, admin_headers, monkeypatch):
    monkeypatch.setattr(admin_notifications, "SUPPORT_QUEUE_LIMIT", 3)
    for i in range(5):
        await _support(db_session, f"Ticket {i}", SupportPriority.LOW)

    data = (await client.get("/api/v1/admin/notifications", headers=admin_headers)).json()

    assert data["summary"]["support_messages"] == 3
    assert [m["subject"] for m in data["support_messages"]["low"]] == ["Ticket 4", "Ticket 3", "Ticket 2"]


@pytest.mark.asyncio
async def test_dashboard_stats(client: AsyncClient, student, other_student, admin_headers, make_product):
    await make_product(student, status=ProductStatus.PENDING)
    await make_product(student)
    await make_product(other_student, status=ProductStatus.SOLD)

    response = await client.get("/api/v1/admin/dashboard/stats", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_users"] == 3
    assert data["total_admins"] == 1
    assert data["total_products"] == 3
    assert data["products_by_status"] == {"pending": 1, "active": 1, "rejected": 0, "sold": 1}
    assert data["total_orders"] == 0


@pytest.mark.asyncio
async def test_dashboard_stats_served_from_cache(client: AsyncClient, admin_headers, monkeypatch):
    cached = {
        "total_users": 42,
        "total_admins": 2,
        "active_users_7d": 10,
        "verified_users": 5,
        "total_products": 7,
        "products_by_status": {"pending": 1, "active": 6, "rejected": 0, "sold": 0},
        "total_orders": 3,
        "pending_tutor_applications": 0,
        "pending_support_messages": 1,
    }
    monkeypatch.setattr(cache, "get", AsyncMock(return_value=cached))

    data = (await client.get("/api/v1/admin/dashboard/stats", headers=admin_headers)).json()

    assert data["total_users"] == 42
    cache.get.assert_awaited_with(DASHBOARD_STATS_KEY)


@pytest.mark.asyncio
async def test_admin_me(client: AsyncClient, admin, admin_headers):
    response = await client.get("/api/v1/admin/me", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["id"] == admin.id
    assert response.json()["permissions"] == ["*"]


@pytest.mark.asyncio
async def test_pending_queue_is_not_truncated(db_session, student, make_product):

    created = [
        await make_product(student, title=f"Queued {i}", status=ProductStatus.PENDING)
        for i in range(40)
    ]
    await make_product(student, title="Already live")

    queue = await product_crud.get_pending(db_session)

    assert len(queue) == 40
    assert {p.id for p in queue} == {p.id for p in created}
    assert queue[0].id == created[-1].id

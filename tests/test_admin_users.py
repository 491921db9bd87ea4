"""Tests for admin user management and document verification."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from zenith.core.config import settings
from zenith.models.message import Message
from zenith.models.order import Order, OrderItem
from zenith.models.product import Product
from zenith.models.user import User
from zenith.models.wishlist import WishlistItem


@pytest.mark.asyncio
async def test_list_users_search_and_filters(client: AsyncClient, student, other_student, admin_headers):
    response = await client.get("/api/v1/admin/users", params={"search": "sipho"}, headers=admin_headers)
    assert [u["email"] for u in response.json()["items"]] == ["sipho@example.com"]

    response = await client.get("/api/v1/admin/users", params={"role": "admin"}, headers=admin_headers)
    assert [u["email"] for u in response.json()["items"]] == ["admin@example.com"]

    response = await client.get("/api/v1/admin/users", params={"verified": "false"}, headers=admin_headers)
    assert response.json()["total"] == 3


@pytest.mark.asyncio
async def test_limited_admin_can_read_but_not_delete(client: AsyncClient, student, limited_admin_headers):
    assert (await client.get("/api/v1/admin/users", headers=limited_admin_headers)).status_code == 200

    response = await client.delete(f"/api/v1/admin/users/{student.id}", headers=limited_admin_headers)
    assert response.status_code == 403
    assert "users:delete" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_student(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        json={"email": "created@example.com", "password": "password123", "first_name": "Nomsa"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "student"
    assert data["email_verified"] is True


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, student, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        json={"email": student.email, "password": "password123"},
        headers=admin_headers,
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_admin_defaults_to_all_permissions(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        json={"email": "second.admin@example.com", "password": "password123", "role": "admin"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["admin_permissions"] == ["*"]


@pytest.mark.asyncio
async def test_unknown_permission_rejected(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        json={
            "email": "second.admin@example.com",
            "password": "password123",
            "role": "admin",
            "admin_permissions": ["users:read", "rockets:launch"],
        },
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "rockets:launch" in response.json()["detail"]


@pytest.mark.asyncio
async def test_admin_quota(client: AsyncClient, student, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_MAX_ADMINS", 1)

    created = await client.post(
        "/api/v1/admin/users",
        json={"email": "second.admin@example.com", "password": "password123", "role": "admin"},
        headers=admin_headers,
    )
    promoted = await client.put(
        f"/api/v1/admin/users/{student.id}",
        json={"role": "admin"},
        headers=admin_headers,
    )

    assert created.status_code == 409
    assert promoted.status_code == 409
    assert "Maximum of 1" in promoted.json()["detail"]


@pytest.mark.asyncio
async def test_promote_to_admin(client: AsyncClient, student, admin_headers):
    response = await client.put(
        f"/api/v1/admin/users/{student.id}",
        json={"role": "admin"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    assert response.json()["admin_permissions"] == ["*"]


@pytest.mark.asyncio
async def test_update_user_marks_verified_and_notifies(client: AsyncClient, student, student_headers, admin_headers):
    response = await client.put(
        f"/api/v1/admin/users/{student.id}",
        json={"admin_verified": True, "university": "Wits"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["admin_verified"] is True
    assert response.json()["verified_at"] is not None
    assert response.json()["university"] == "Wits"

    notifications = (await client.get("/api/v1/notifications", headers=student_headers)).json()
    assert [n["type"] for n in notifications["items"]] == ["verification_approved"]

    # Setting it again does not notify twice
    await client.put(f"/api/v1/admin/users/{student.id}", json={"admin_verified": True}, headers=admin_headers)
    notifications = (await client.get("/api/v1/notifications", headers=student_headers)).json()
    assert notifications["total"] == 1


@pytest.mark.asyncio
async def test_user_detail(client: AsyncClient, student, admin_headers, make_product):
    await make_product(student, title="One")
    await make_product(student, title="Two")

    response = await client.get(f"/api/v1/admin/users/{student.id}", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["counts"] == {"products": 2, "orders": 0, "tutor_applications": 0}
    assert {p["title"] for p in data["recent_products"]} == {"One", "Two"}


@pytest.mark.asyncio
async def test_cannot_delete_admin(client: AsyncClient, admin, admin_headers, limited_admin):
    response = await client.delete(f"/api/v1/admin/users/{limited_admin.id}", headers=admin_headers)
    assert response.status_code == 403

    response = await client.delete(f"/api/v1/admin/users/{admin.id}", headers=admin_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_unknown_user(client: AsyncClient, admin_headers):
    response = await client.delete("/api/v1/admin/users/31337", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_user_cascades(
    client: AsyncClient,
    db_session,
    student,
    student_headers,
    other_student,
    other_headers,
    admin_headers,
    make_product,
):
    sold_item = await make_product(student, title="Lamp", price=120.0, quantity=2)
    await make_product(student, title="Desk")

    # Another student wishlists, messages about and buys the lamp
    await client.post("/api/v1/wishlist", json={"product_id": sold_item.id}, headers=other_headers)
    await client.post(
        "/api/v1/messages",
        json={"receiver_id": student.id, "content": "Is the lamp available?", "product_id": sold_item.id},
        headers=other_headers,
    )
    checkout = await client.post(
        "/api/v1/orders/checkout",
        json={
            "items": [{"product_id": sold_item.id, "quantity": 1}],
            "shipping_address": {
                "first_name": "Sipho",
                "last_name": "Tester",
                "email": "sipho@example.com",
                "address": "1 Jan Smuts Ave",
                "city": "Johannesburg",
            },
        },
        headers=other_headers,
    )
    assert checkout.status_code == 201
    student_id = student.id

    response = await client.delete(f"/api/v1/admin/users/{student_id}", headers=admin_headers)
    assert response.status_code == 200

    assert await db_session.get(User, student_id) is None
    products = (await db_session.execute(select(Product).where(Product.seller_id == student_id))).scalars().all()
    assert products == []
    assert (await db_session.execute(select(WishlistItem))).scalars().all() == []
    assert (await db_session.execute(select(Message))).scalars().all() == []

    # The buyer keeps the order, detached from the deleted listing
    orders = (await db_session.execute(select(Order))).scalars().all()
    assert len(orders) == 1
    items = (await db_session.execute(select(OrderItem))).scalars().all()
    assert items[0].product_id is None
    assert items[0].title == "Lamp"

    audit = await client.get("/api/v1/admin/audit/actions", params={"action": "DELETE_USER"}, headers=admin_headers)
    assert audit.json()["items"][0]["target_id"] == student_id


@pytest.mark.asyncio
async def test_document_verification_flow(client: AsyncClient, student, student_headers, admin_headers):
    upload = await client.post(
        "/api/v1/profile/verification",
        json={"student_card_url": "https://files.example.com/card.png"},
        headers=student_headers,
    )
    assert upload.json()["documents_uploaded"] is False

    upload = await client.post(
        "/api/v1/profile/verification",
        json={"id_document_url": "https://files.example.com/id.png"},
        headers=student_headers,
    )
    assert upload.json()["documents_uploaded"] is True

    queue = (await client.get("/api/v1/admin/notifications", headers=admin_headers)).json()
    assert [u["id"] for u in queue["pending_verifications"]] == [student.id]

    rejected = await client.patch(
        f"/api/v1/admin/users/{student.id}/verification",
        json={"action": "reject", "rejection_reason": "ID photo is blurry"},
        headers=admin_headers,
    )
    assert rejected.status_code == 200
    assert rejected.json()["documents_uploaded"] is False
    assert rejected.json()["verification_notes"] == "ID photo is blurry"

    queue = (await client.get("/api/v1/admin/notifications", headers=admin_headers)).json()
    assert queue["pending_verifications"] == []

    approved = await client.patch(
        f"/api/v1/admin/users/{student.id}/verification",
        json={"action": "approve"},
        headers=admin_headers,
    )
    assert approved.json()["admin_verified"] is True

    types = [n["type"] for n in (await client.get("/api/v1/notifications", headers=student_headers)).json()["items"]]
    assert set(types) == {"verification_rejected", "verification_approved"}


@pytest.mark.asyncio
async def test_verification_review_requires_reason(client: AsyncClient, student, admin_headers):
    response = await client.patch(
        f"/api/v1/admin/users/{student.id}/verification",
        json={"action": "reject"},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_profile_update(client: AsyncClient, student_headers):
    response = await client.patch(
        "/api/v1/profile",
        json={"bio": "Second-year engineering", "location": "Pretoria"},
        headers=student_headers,
    )

    assert response.status_code == 200
    assert response.json()["bio"] == "Second-year engineering"
    assert response.json()["first_name"] == "Thandi"

"""Tests for admin listing moderation."""

import pytest
from httpx import AsyncClient

from zenith.models.product import ProductStatus


@pytest.mark.asyncio
async def test_admin_lists_pending_queue(client: AsyncClient, student, admin_headers, make_product):
    await make_product(student, title="Waiting", status=ProductStatus.PENDING)
    await make_product(student, title="Live")

    response = await client.get("/api/v1/admin/products", params={"status": "pending"}, headers=admin_headers)

    assert response.status_code == 200
    assert [p["title"] for p in response.json()["items"]] == ["Waiting"]


@pytest.mark.asyncio
async def test_student_cannot_use_admin_endpoints(client: AsyncClient, student, student_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)

    response = await client.put(
        f"/api/v1/admin/products/{product.id}/verify",
        json={"approved": True},
        headers=student_headers,
    )

    assert response.status_code == 403
    assert response.json()["error_code"] == "permission_denied"


@pytest.mark.asyncio
async def test_approve_product(client: AsyncClient, student, student_headers, admin, admin_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)

    response = await client.put(
        f"/api/v1/admin/products/{product.id}/verify",
        json={"approved": True, "verification_notes": "Looks good"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "active"
    assert data["admin_approved"] is True
    assert data["approved_by_id"] == admin.id
    assert data["verification_notes"] == "Looks good"

    # Now public
    assert (await client.get(f"/api/v1/products/{product.id}")).status_code == 200
    listing = await client.get("/api/v1/products")
    assert listing.json()["total"] == 1

    notifications = await client.get("/api/v1/notifications", headers=student_headers)
    assert notifications.json()["items"][0]["type"] == "product_approved"


@pytest.mark.asyncio
async def test_reject_product_requires_reason(client: AsyncClient, student, admin_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)

    response = await client.put(
        f"/api/v1/admin/products/{product.id}/verify",
        json={"approved": False, "rejection_reason": "   "},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "validation_error"


@pytest.mark.asyncio
async def test_reject_product(client: AsyncClient, student, student_headers, admin_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)

    response = await client.put(
        f"/api/v1/admin/products/{product.id}/verify",
        json={"approved": False, "rejection_reason": "Prohibited item"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["rejection_reason"] == "Prohibited item"

    notifications = await client.get("/api/v1/notifications", headers=student_headers)
    latest = notifications.json()["items"][0]
    assert latest["type"] == "product_rejected"
    assert "Prohibited item" in latest["message"]


@pytest.mark.asyncio
async def test_verify_unknown_product(client: AsyncClient, admin_headers):
    response = await client.put(
        "/api/v1/admin/products/4242/verify",
        json={"approved": True},
        headers=admin_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_moderation_is_audited(client: AsyncClient, student, admin, admin_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)
    await client.put(
        f"/api/v1/admin/products/{product.id}/verify",
        json={"approved": True},
        headers={**admin_headers, "User-Agent": "pytest-agent"},
    )

    response = await client.get("/api/v1/admin/audit/actions", headers=admin_headers)

    entries = response.json()["items"]
    assert len(entries) == 1
    assert entries[0]["action"] == "APPROVE_PRODUCT"
    assert entries[0]["admin_id"] == admin.id
    assert entries[0]["target_id"] == product.id
    assert entries[0]["old_values"] == {"status": "pending"}
    assert entries[0]["user_agent"] == "pytest-agent"


@pytest.mark.asyncio
async def test_admin_delete_product(client: AsyncClient, student, admin_headers, make_product):
    product = await make_product(student)

    response = await client.delete(f"/api/v1/admin/products/{product.id}", headers=admin_headers)
    assert response.status_code == 200

    assert (await client.get(f"/api/v1/products/{product.id}")).status_code == 404
    audit = await client.get("/api/v1/admin/audit/actions", params={"action": "DELETE_PRODUCT"}, headers=admin_headers)
    assert audit.json()["total"] == 1


@pytest.mark.asyncio
async def test_admin_without_permission_is_refused(client: AsyncClient, student, limited_admin_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)

    response = await client.put(
        f"/api/v1/admin/products/{product.id}/verify",
        json={"approved": True},
        headers=limited_admin_headers,
    )

    assert response.status_code == 403

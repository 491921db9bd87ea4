"""Tests for the listing lifecycle rules."""

import pytest
from httpx import AsyncClient

from zenith.core.exceptions import InvalidTransitionError
from zenith.models.product import LISTING_TRANSITIONS, ProductStatus
from zenith.services.listing_service import ListingService


class TestTransitionTable:
    """The allowed status changes."""

    def test_pending_can_be_approved_or_rejected(self):
        assert LISTING_TRANSITIONS[ProductStatus.PENDING] == {ProductStatus.ACTIVE, ProductStatus.REJECTED}

    def test_active_can_only_be_sold(self):
        assert LISTING_TRANSITIONS[ProductStatus.ACTIVE] == {ProductStatus.SOLD}

    @pytest.mark.parametrize("status", [ProductStatus.SOLD, ProductStatus.REJECTED])
    def test_terminal_states(self, status):
        assert LISTING_TRANSITIONS[status] == frozenset()


@pytest.mark.asyncio
async def test_mark_sold(client: AsyncClient, student, student_headers, make_product):
    product = await make_product(student)

    response = await client.patch(
        f"/api/v1/products/{product.id}/status",
        json={"status": "sold"},
        headers=student_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "sold"
    assert response.json()["sold_at"] is not None

    # Sold listings stay viewable but leave the marketplace
    assert (await client.get(f"/api/v1/products/{product.id}")).status_code == 200
    assert (await client.get("/api/v1/products")).json()["total"] == 0


@pytest.mark.asyncio
async def test_cannot_sell_pending_listing(client: AsyncClient, student, student_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)

    response = await client.patch(
        f"/api/v1/products/{product.id}/status",
        json={"status": "sold"},
        headers=student_headers,
    )

    assert response.status_code == 409
    assert response.json()["error_code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_seller_cannot_self_approve(client: AsyncClient, student, student_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)

    response = await client.patch(
        f"/api/v1/products/{product.id}/status",
        json={"status": "active"},
        headers=student_headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_sold_is_final(client: AsyncClient, student, student_headers, make_product):
    product = await make_product(student, status=ProductStatus.SOLD)

    response = await client.patch(
        f"/api/v1/products/{product.id}/status",
        json={"status": "sold"},
        headers=student_headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_only_owner_changes_status(client: AsyncClient, student, other_headers, make_product):
    product = await make_product(student)

    response = await client.patch(
        f"/api/v1/products/{product.id}/status",
        json={"status": "sold"},
        headers=other_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_status_value_rejected(client: AsyncClient, student, student_headers, make_product):
    product = await make_product(student)

    response = await client.patch(
        f"/api/v1/products/{product.id}/status",
        json={"status": "archived"},
        headers=student_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_approving_twice_is_a_conflict(client: AsyncClient, student, admin_headers, make_product):
    product = await make_product(student, status=ProductStatus.PENDING)
    url = f"/api/v1/admin/products/{product.id}/verify"

    assert (await client.put(url, json={"approved": True}, headers=admin_headers)).status_code == 200
    response = await client.put(url, json={"approved": True}, headers=admin_headers)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_rejected_listing_cannot_be_approved(db_session, student, admin, make_product):
    product = await make_product(student, status=ProductStatus.REJECTED)

    with pytest.raises(InvalidTransitionError) as exc_info:
        await ListingService(db_session).review(product.id, admin, approved=True)

    assert exc_info.value.current == "rejected"
    assert exc_info.value.target == "active"


@pytest.mark.asyncio
async def test_missing_reason_checked_before_transition(db_session, student, admin, make_product):
    """A reasonless rejection of a sold listing is a validation error, not a conflict."""
    from zenith.core.exceptions import ValidationError

    product = await make_product(student, status=ProductStatus.SOLD)

    with pytest.raises(ValidationError):
        await ListingService(db_session).review(product.id, admin, approved=False)

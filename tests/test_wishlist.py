"""Tests for the wishlist."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_add_and_list(client: AsyncClient, student, other_headers, make_product):
    product = await make_product(student, title="Graphing Calculator")

    added = await client.post("/api/v1/wishlist", json={"product_id": product.id}, headers=other_headers)
    assert added.status_code == 201
    assert added.json()["product"]["title"] == "Graphing Calculator"

    wishlist = (await client.get("/api/v1/wishlist", headers=other_headers)).json()
    assert [item["product_id"] for item in wishlist] == [product.id]


@pytest.mark.asyncio
async def test_duplicate_add_conflicts(client: AsyncClient, student, other_headers, make_product):
    product = await make_product(student)
    await client.post("/api/v1/wishlist", json={"product_id": product.id}, headers=other_headers)

    response = await client.post("/api/v1/wishlist", json={"product_id": product.id}, headers=other_headers)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_add_unknown_product(client: AsyncClient, other_headers):
    response = await client.post("/api/v1/wishlist", json={"product_id": 777}, headers=other_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_remove(client: AsyncClient, student, other_headers, make_product):
    product = await make_product(student)
    await client.post("/api/v1/wishlist", json={"product_id": product.id}, headers=other_headers)

    response = await client.delete(f"/api/v1/wishlist/{product.id}", headers=other_headers)
    assert response.status_code == 200
    assert (await client.get("/api/v1/wishlist", headers=other_headers)).json() == []

    response = await client.delete(f"/api/v1/wishlist/{product.id}", headers=other_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_wishlists_are_private(client: AsyncClient, student, student_headers, other_headers, make_product):
    product = await make_product(student)
    await client.post("/api/v1/wishlist", json={"product_id": product.id}, headers=other_headers)

    assert (await client.get("/api/v1/wishlist", headers=student_headers)).json() == []


@pytest.mark.asyncio
async def test_deleting_listing_removes_wishlist_entries(
    client: AsyncClient, student, student_headers, other_headers, make_product
):
    product = await make_product(student)
    await client.post("/api/v1/wishlist", json={"product_id": product.id}, headers=other_headers)

    await client.delete(f"/api/v1/products/{product.id}", headers=student_headers)

    assert (await client.get("/api/v1/wishlist", headers=other_headers)).json() == []

"""Marketplace listing endpoints."""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user, get_optional_user
from zenith.crud.product import SORT_FIELDS, category_crud, product_crud
from zenith.db.session import get_db
from zenith.models.product import ProductCondition, ProductStatus
from zenith.models.user import User
from zenith.schemas.common import Message, PaginatedResponse
from zenith.schemas.product import (
    CategoryResponse,
    ProductCreate,
    ProductFilters,
    ProductResponse,
    ProductStatusUpdate,
)
from zenith.services.listing_service import ListingService

router = APIRouter()


@router.get("", response_model=PaginatedResponse[ProductResponse])
async def list_products(
    category: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    condition: Optional[ProductCondition] = None,
    location: Optional[str] = None,
    university: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: Literal["created_at", "price", "title"] = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """
    Browse the marketplace.

    Only active listings are returned; pending, rejected and sold
    listings never appear here.
    """
    products, total = await product_crud.search_active(
        db,
        category=category,
        min_price=min_price,
        max_price=max_price,
        condition=condition,
        location=location,
        university=university,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    return PaginatedResponse.create(
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/filters", response_model=ProductFilters)
async def get_filters(db: AsyncSession = Depends(get_db)):
    """Categories and conditions available for filtering."""
    categories = await category_crud.get_all(db)
    return ProductFilters(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        conditions=[c.value for c in ProductCondition],
        sort_fields=list(SORT_FIELDS),
    )


@router.get("/mine", response_model=List[ProductResponse])
async def list_my_products(
    status_filter: Optional[ProductStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """The caller's listings in every status."""
    return await product_crud.get_by_seller(db, seller_id=user.id, status=status_filter)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Submit a listing. It stays pending until an admin approves it."""
    return await ListingService(db).submit(user, product_in)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user)
):
    return await ListingService(db).get_visible(product_id, viewer)


@router.patch("/{product_id}/status", response_model=ProductResponse)
async def update_product_status(
    product_id: int,
    body: ProductStatusUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Mark an active listing as sold. Sold is final."""
    return await ListingService(db).change_status(product_id, user, body.status)


@router.delete("/{product_id}", response_model=Message)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    await ListingService(db).delete_own(product_id, user)
    return Message(message="Listing deleted")

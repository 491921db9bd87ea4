"""Admin listing moderation."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_request_meta, require_permission
from zenith.crud.product import product_crud
from zenith.db.session import get_db
from zenith.models.product import ProductStatus
from zenith.models.user import AdminPermission, User
from zenith.schemas.common import Message, PaginatedResponse
from zenith.schemas.product import AdminProductResponse, ProductVerifyRequest
from zenith.services.audit import RequestMeta
from zenith.services.listing_service import ListingService

router = APIRouter()


@router.get("", response_model=PaginatedResponse[AdminProductResponse])
async def list_products(
    status_filter: Optional[ProductStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.PRODUCTS_READ))
):
    """Listings in any status; filter with ``?status=pending`` for the queue."""
    products, total = await product_crud.get_by_status(
        db,
        status=status_filter,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    return PaginatedResponse.create(
        items=[AdminProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.put("/{product_id}/verify", response_model=AdminProductResponse)
async def verify_product(
    product_id: int,
    body: ProductVerifyRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.PRODUCTS_UPDATE)),
    meta: RequestMeta = Depends(get_request_meta)
):
    """Approve or reject a pending listing. Rejection needs a reason."""
    return await ListingService(db).review(
        product_id,
        admin,
        approved=body.approved,
        rejection_reason=body.rejection_reason,
        verification_notes=body.verification_notes,
        meta=meta,
    )


@router.delete("/{product_id}", response_model=Message)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.PRODUCTS_DELETE)),
    meta: RequestMeta = Depends(get_request_meta)
):
    await ListingService(db).delete_as_admin(product_id, admin, meta=meta)
    return Message(message="Product deleted")

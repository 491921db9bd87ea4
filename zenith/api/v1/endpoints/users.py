"""Public seller profiles."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.exceptions import NotFoundError
from zenith.crud.product import product_crud
from zenith.crud.user import user_crud
from zenith.db.session import get_db
from zenith.models.product import ProductStatus
from zenith.schemas.product import ProductResponse
from zenith.schemas.user import PublicProfile

router = APIRouter()


async def _get_public_user(db: AsyncSession, user_id: int):
    user = await user_crud.get(db, user_id)
    if user is None or not user.is_active:
        raise NotFoundError("user", user_id)
    return user


@router.get("/{user_id}/profile", response_model=PublicProfile)
async def get_public_profile(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await _get_public_user(db, user_id)
    active = await product_crud.count_by_seller(
        db, seller_id=user.id, status=ProductStatus.ACTIVE
    )
    return PublicProfile(
        id=user.id,
        full_name=user.full_name,
        university=user.university,
        profile_picture_url=user.profile_picture_url,
        admin_verified=user.admin_verified,
        location=user.location,
        bio=user.bio,
        is_tutor=user.is_tutor,
        active_listings=active,
        created_at=user.created_at,
    )


@router.get("/{user_id}/products", response_model=List[ProductResponse])
async def get_user_products(user_id: int, db: AsyncSession = Depends(get_db)):
    """A seller's active listings."""
    user = await _get_public_user(db, user_id)
    return await product_crud.get_by_seller(
        db, seller_id=user.id, status=ProductStatus.ACTIVE
    )

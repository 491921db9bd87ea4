"""The caller's wishlist."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user
from zenith.core.exceptions import ConflictError, NotFoundError
from zenith.crud.order import wishlist_crud
from zenith.crud.product import product_crud
from zenith.db.session import get_db
from zenith.models.user import User
from zenith.schemas.common import Message
from zenith.schemas.order import WishlistAdd, WishlistItemResponse

router = APIRouter()


@router.get("", response_model=List[WishlistItemResponse])
async def get_wishlist(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return await wishlist_crud.get_for_user(db, user.id)


@router.post("", response_model=WishlistItemResponse, status_code=status.HTTP_201_CREATED)
async def add_to_wishlist(
    body: WishlistAdd,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    await product_crud.get_or_404(db, body.product_id)
    if await wishlist_crud.get_item(db, user_id=user.id, product_id=body.product_id):
        raise ConflictError("Product already in wishlist")
    return await wishlist_crud.add(db, user_id=user.id, product_id=body.product_id)


@router.delete("/{product_id}", response_model=Message)
async def remove_from_wishlist(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    item = await wishlist_crud.get_item(db, user_id=user.id, product_id=product_id)
    if item is None:
        raise NotFoundError("wishlist item", product_id)
    await wishlist_crud.remove(db, db_obj=item)
    return Message(message="Removed from wishlist")

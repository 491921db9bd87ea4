"""CRUD operations for WishlistItem, Order and OrderItem models."""

from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.order import Order, OrderItem, OrderStatus
from zenith.models.wishlist import WishlistItem
from zenith.schemas.order import CheckoutRequest, WishlistAdd


class CRUDWishlist(CRUDBase[WishlistItem, WishlistAdd, WishlistAdd]):
    """CRUD operations for WishlistItem model."""

    async def get_item(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        product_id: int
    ) -> Optional[WishlistItem]:
        result = await db.execute(
            select(WishlistItem).where(
                WishlistItem.user_id == user_id,
                WishlistItem.product_id == product_id
            )
        )
        return result.scalar_one_or_none()

    async def get_for_user(self, db: AsyncSession, user_id: int) -> List[WishlistItem]:
        result = await db.execute(
            select(WishlistItem)
            .where(WishlistItem.user_id == user_id)
            .order_by(WishlistItem.created_at.desc(), WishlistItem.id.desc())
        )
        return list(result.scalars().all())

    async def add(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        product_id: int
    ) -> WishlistItem:
        item = WishlistItem(user_id=user_id, product_id=product_id)
        await self.save(db, item)
        await db.refresh(item, attribute_names=["product"])
        return item


class CRUDOrder(CRUDBase[Order, CheckoutRequest, CheckoutRequest]):
    """CRUD operations for Order model."""

    async def get_for_buyer(
        self,
        db: AsyncSession,
        buyer_id: int,
        limit: int = 100
    ) -> List[Order]:
        """A buyer's orders, newest first."""
        result = await db.execute(
            select(Order)
            .where(Order.buyer_id == buyer_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def has_purchased(
        self,
        db: AsyncSession,
        *,
        buyer_id: int,
        product_id: int
    ) -> bool:
        """Whether a completed order of this buyer contains the product."""
        result = await db.execute(
            select(func.count(OrderItem.id))
            .join(Order, OrderItem.order_id == Order.id)
            .where(
                Order.buyer_id == buyer_id,
                Order.status == OrderStatus.COMPLETED,
                OrderItem.product_id == product_id
            )
        )
        return result.scalar_one() > 0

    async def count_for_buyer(self, db: AsyncSession, buyer_id: int) -> int:
        result = await db.execute(
            select(func.count(Order.id)).where(Order.buyer_id == buyer_id)
        )
        return result.scalar_one()


wishlist_crud = CRUDWishlist(WishlistItem, resource_name="wishlist item")
order_crud = CRUDOrder(Order)

"""Checkout and order history."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user
from zenith.crud.order import order_crud
from zenith.db.session import get_db
from zenith.models.user import User
from zenith.schemas.order import CheckoutRequest, OrderResponse, PurchaseCheck
from zenith.services.checkout_service import CheckoutService

router = APIRouter()


@router.post("/checkout", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def checkout(
    body: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Place an order.

    Every listing must be active, not the buyer's own and in stock. A flat
    shipping fee is added; payment is simulated.
    """
    return await CheckoutService(db).checkout(user, body)


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return await order_crud.get_for_buyer(db, user.id)


@router.get("/check-purchase", response_model=PurchaseCheck)
async def check_purchase(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    purchased = await order_crud.has_purchased(db, buyer_id=user.id, product_id=product_id)
    return PurchaseCheck(product_id=product_id, purchased=purchased)

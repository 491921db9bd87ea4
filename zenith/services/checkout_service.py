"""Checkout: validate a cart, create the order, settle stock.

Payment is simulated. The order is stored as ``completed`` with a generated
payment reference.
"""

import uuid
from collections import OrderedDict
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.config import settings
from zenith.core.exceptions import ConflictError, NotFoundError, ValidationError
from zenith.core.logging import get_logger, log_success
from zenith.crud.notification import notification_crud
from zenith.crud.order import order_crud
from zenith.crud.product import product_crud
from zenith.models.order import Order, OrderItem, OrderStatus
from zenith.models.product import Product, ProductStatus
from zenith.models.user import User
from zenith.schemas.order import CheckoutRequest
from zenith.services.cache_service import cache
from zenith.services.listing_service import ListingService

logger = get_logger(__name__)


class CheckoutService:
    """Turn a cart into a completed order."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load_cart(self, buyer: User, request: CheckoutRequest) -> "OrderedDict[int, tuple]":
        # Repeated product ids are merged into a single line
        quantities: Dict[int, int] = OrderedDict()
        for item in request.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

        cart: "OrderedDict[int, tuple]" = OrderedDict()
        for product_id, quantity in quantities.items():
            product = await product_crud.get(self.db, product_id)
            if product is None:
                raise NotFoundError("product", product_id)
            if product.status != ProductStatus.ACTIVE:
                raise ConflictError(f'"{product.title}" is no longer available')
            if product.seller_id == buyer.id:
                raise ValidationError("You cannot buy your own listing", field="items")
            if product.quantity < quantity:
                raise ConflictError(
                    f'Only {product.quantity} of "{product.title}" available'
                )
            cart[product_id] = (product, quantity)
        return cart

    async def checkout(self, buyer: User, request: CheckoutRequest) -> Order:
        cart = await self._load_cart(buyer, request)

        subtotal = round(sum(p.price * q for p, q in cart.values()), 2)
        shipping_fee = settings.SHIPPING_FEE
        order = Order(
            buyer_id=buyer.id,
            status=OrderStatus.COMPLETED,
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            total=round(subtotal + shipping_fee, 2),
            shipping_address=request.shipping_address.model_dump(),
            payment_reference=f"SIM-{uuid.uuid4().hex[:12].upper()}",
            items=[
                OrderItem(
                    product_id=product.id,
                    seller_id=product.seller_id,
                    title=product.title,
                    unit_price=product.price,
                    quantity=quantity,
                )
                for product, quantity in cart.values()
            ],
        )
        self.db.add(order)
        await self.db.flush()

        listings = ListingService(self.db)
        sold_out: List[Product] = []
        for product, quantity in cart.values():
            product.quantity -= quantity
            if product.quantity <= 0:
                product.quantity = 0
                sold_out.append(await listings.mark_sold(product))
            else:
                await product_crud.save(self.db, product)

            await notification_crud.notify(
                self.db,
                user_id=product.seller_id,
                type="product_sold",
                title="Item sold",
                message=f'{buyer.full_name} bought {quantity} x "{product.title}".',
                metadata={"product_id": product.id, "order_id": order.id, "quantity": quantity},
            )

        await notification_crud.notify(
            self.db,
            user_id=buyer.id,
            type="order_placed",
            title="Order confirmed",
            message=f"Order #{order.id} confirmed. Total R{order.total:.2f}.",
            metadata={"order_id": order.id},
        )

        await self.db.refresh(order)
        await self.db.refresh(order, attribute_names=["items"])
        await cache.invalidate_dashboard()

        log_success(
            logger,
            f"Order {order.id} placed by user {buyer.id} "
            f"({len(cart)} items, {len(sold_out)} sold out)"
        )
        return order
